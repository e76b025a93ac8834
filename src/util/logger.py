import sys

from loguru import logger

PALETTE = {
    "chain_solver": "green",
    "board_builder": "blue",
    "cli": "cyan",
}

LEVEL_PER_COMPONENT = {
    "chain_solver": "INFO",
    "board_builder": "WARNING",
}


def component_filter(record):
    comp = record["extra"].get("component", "")
    min_level = logger.level(LEVEL_PER_COMPONENT.get(comp, "DEBUG")).no
    return record["level"].no >= min_level


def formatter(record):
    comp = record["extra"].get("component", "")
    colour = PALETTE.get(comp, "white")

    # Colour markup must sit in the returned template, not in the message
    return (
        "{time:HH:mm:ss} | "
        f"<{colour}>{comp:<15}</> | "
        "<level>{message}</level>\n"
    )


def file_formatter(record):
    comp = record["extra"].get("component", "")
    return "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | " f"{comp:<15} | " "{message}\n"


def set_component_level(component: str, level: str) -> None:
    """Change the minimum level shown on stderr for one component."""
    LEVEL_PER_COMPONENT[component] = level


def add_file_sink(path: str, level: str = "DEBUG") -> int:
    """Mirror every component's records at ``level`` and above into ``path``.

    The per-component stderr levels do not apply to the file, so a search
    trace can be captured while the terminal stays quiet.

    Returns:
        The loguru handler id, for ``logger.remove``.
    """
    return logger.add(path, format=file_formatter, level=level, colorize=False)


logger.remove()
logger.add(sys.stderr, format=formatter, filter=component_filter, colorize=True)
