from os import environ
from time import gmtime
from logging import StreamHandler, Logger, NOTSET
from colorlog import ColoredFormatter


class SingletonMeta(type):
    _instance = {}

    def __call__(cls, *args, **kwargs):
        if cls not in cls._instance:
            instance = super().__call__(*args, **kwargs)
            cls._instance[cls] = instance
        return cls._instance[cls]


class RepositoryManagerLogger(Logger, metaclass=SingletonMeta):
    _initialized = False

    def __init__(self):
        if RepositoryManagerLogger._initialized:
            return

        super().__init__(name="RepositoryManagerLogger", level=environ.get("LOG_LEVEL", NOTSET))

        local_formatter = ColoredFormatter(
            "%(log_color)s%(asctime)s | %(levelname)s | %(msg)s",
            datefmt="%d-%m-%Y, %H:%M:%S",
            log_colors={
                "DEBUG": "blue",
                "INFO": "",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
        local_formatter.converter = gmtime

        console_handler = StreamHandler()
        console_handler.setFormatter(local_formatter)
        self.addHandler(console_handler)

        RepositoryManagerLogger._initialized = True


logger = RepositoryManagerLogger()
