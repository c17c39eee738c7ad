"""
Configuración centralizada de logs.

Cada módulo usa su propio logger (logging.getLogger(__name__));
aquí solo se instala el handler raíz y se silencian librerías ruidosas.
"""
import logging

_SUPPRESSED_LOGGERS = [
    "urllib3",
]

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    for name in _SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
