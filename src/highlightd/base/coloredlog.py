import logging

BLACK, RED, GREEN, YELLOW, BLUE, MAGENTA, CYAN, WHITE = range(8)

# Foreground colors are 30 plus the color number, background colors 40 plus.
RESET_SEQ = "\033[0m"
COLOR_SEQ = "\033[1;%dm"

FOREGROUND = {
    "DEBUG": BLUE,
    "INFO": GREEN,
    "WARNING": BLACK,
    "ERROR": WHITE,
    "CRITICAL": YELLOW,
}
BACKGROUND = {
    "WARNING": YELLOW,
    "ERROR": RED,
    "CRITICAL": RED,
}


class Formatter(logging.Formatter):
    def __init__(self, msg):
        super().__init__(f"%(color)s{msg}%(reset)s")

    def format(self, record):
        color = ""
        if record.levelname in FOREGROUND:
            color += COLOR_SEQ % (30 + FOREGROUND[record.levelname])
        if record.levelname in BACKGROUND:
            color += COLOR_SEQ % (40 + BACKGROUND[record.levelname])
        record.color = color
        record.reset = RESET_SEQ if color else ""
        return super().format(record)

    @staticmethod
    def is_supported(stream):
        return hasattr(stream, "isatty") and stream.isatty()


__all__ = ["Formatter"]
