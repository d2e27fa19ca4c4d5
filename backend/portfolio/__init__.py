"""Portfolio tracker: proyectos, módulos completados y pruebas de entrega."""

__version__ = "0.1.0"
