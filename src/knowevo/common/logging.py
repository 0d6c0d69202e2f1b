import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s]: %(message)s"


class LazyFlushingFileHandler(logging.Handler):
    """
    Handler fichier lazy :
    1. Le fichier n'est créé qu'au premier enregistrement réel
    2. Flush immédiat après chaque enregistrement
    """

    def __init__(self, filename: str, mode: str = "a", encoding: str = "utf-8"):
        super().__init__()
        self.filename = filename
        self.mode = mode
        self.encoding = encoding
        self._handler: Optional[logging.FileHandler] = None

    def _ensure_handler(self) -> None:
        if self._handler is None:
            Path(self.filename).parent.mkdir(parents=True, exist_ok=True)
            self._handler = logging.FileHandler(
                self.filename,
                mode=self.mode,
                encoding=self.encoding,
            )
            self._handler.setFormatter(self.formatter)
            self._handler.setLevel(self.level)

    def emit(self, record):
        self._ensure_handler()
        self._handler.emit(record)
        self._handler.flush()

    @property
    def created(self) -> bool:
        return self._handler is not None

    def close(self):
        if self._handler:
            self._handler.close()
        super().close()


# Loggers déjà configurés, clé = "<chemin du fichier>:<console>:<niveau>"
_LOGGER_CACHE: dict[str, logging.Logger] = {}


def get_logger(
    log_file_name: str,
    logs_dir: Optional[Path] = None,
    enable_console: bool = False,
) -> logging.Logger:
    """
    Récupère un logger fichier avec initialisation lazy.

    Args:
        log_file_name: Nom du fichier de log (ex: "pipeline.log")
        logs_dir: Répertoire des logs (par défaut: settings.logs_dir)
        enable_console: Ajoute une sortie console

    Niveau DEBUG si settings.debug_mode (DEBUG_MODE), INFO sinon.

    Returns:
        Logger configuré, mis en cache, sans propagation au root logger.
    """
    from knowevo.config.settings import get_settings

    settings = get_settings()
    if logs_dir is None:
        logs_dir = settings.logs_dir
    level = logging.DEBUG if settings.debug_mode else logging.INFO

    logs_dir = Path(logs_dir)
    cache_key = f"{logs_dir / log_file_name}:{enable_console}:{logging.getLevelName(level)}"
    if cache_key in _LOGGER_CACHE:
        return _LOGGER_CACHE[cache_key]

    logger_name = f"knowevo.runs.{log_file_name.replace('.log', '')}"
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.propagate = False

    if logger.hasHandlers():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()

    if enable_console:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)

    fh_lazy = LazyFlushingFileHandler(str(logs_dir / log_file_name))
    fh_lazy.setLevel(level)
    fh_lazy.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(fh_lazy)

    # Pas de log ici : le fichier ne doit exister qu'au premier usage réel
    _LOGGER_CACHE[cache_key] = logger
    return logger
