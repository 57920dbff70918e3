import sys

from loguru import logger

PALETTE = {
    "bfs_solver": "green",
    "board_builder": "blue",
    "levels": "cyan",
    "cli": "magenta",
}

LEVEL_PER_COMPONENT = {
    "board_builder": "INFO",
}

_min_level = "INFO"


def component_filter(record):
    comp = record["extra"].get("component", "")
    floor = logger.level(_min_level).no
    min_level = max(logger.level(LEVEL_PER_COMPONENT.get(comp, "DEBUG")).no, floor)
    return record["level"].no >= min_level


def formatter(record):
    comp = record["extra"].get("component", "")
    colour = PALETTE.get(comp, "white")

    # The tag lives in the *template* that the sink receives,
    # so Loguru will translate it to ANSI codes.
    return (
        "{time:HH:mm:ss} | "
        f"<{colour}>{comp:<13}</> | "
        "<level>{message}</level>\n"
    )


def set_level(level: str) -> None:
    """Change the minimum level shown on stderr (e.g. "DEBUG" for --verbose)."""
    global _min_level
    _min_level = level


logger.remove()
logger.add(sys.stderr, format=formatter, filter=component_filter, colorize=True)
