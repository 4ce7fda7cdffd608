icons = {}

STYLES = ("standard", "compatible")


def init(style: str = "standard"):
    """
    Initializes the glyphs used on window title bars.

    :param style: Name of the style set. Options:
                  - 'standard' (default)
                  - 'compatible' (plain ASCII)
    """
    global icons

    if style == "standard":
        icons = {
            "minimize": "▁",
            "unminimize": "◰",
            "maximize": "□",
            "restore": "❐",
            "exit": "⨯",
        }

    elif style == "compatible":
        icons = {
            "minimize": "_",
            "unminimize": "^",
            "maximize": "M",
            "restore": "~",
            "exit": "X",
        }

    else:
        raise ValueError(f"Unknown style: {style}")


def get(name: str) -> str:
    """Returns the glyph for ``name``, loading the standard set on first use."""
    if not icons:
        init()
    return icons[name]
