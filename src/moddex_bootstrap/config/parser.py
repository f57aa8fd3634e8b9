"""INI parser utilities for moddex-bootstrap configuration."""

import configparser
from typing import Any


def _strip_inline_comment(value: str) -> str:
    """Strip inline comments from configuration values.

    Args:
        value: Configuration value that may contain inline comment

    Returns:
        Value with inline comment removed (anything after '  #')
    """
    if "  #" in value:
        return value.split("  #")[0].strip()
    return value


class CommentAwareConfigParser(configparser.ConfigParser):
    """ConfigParser that strips inline comments when reading values."""

    def __init__(self, **kwargs: Any) -> None:  # noqa: ANN401
        """Create a parser with interpolation disabled.

        Asset suffixes and URLs may contain '%' characters.
        """
        kwargs.setdefault("interpolation", None)
        super().__init__(**kwargs)

    def get(  # type: ignore[override]
        self,
        section: str,
        option: str,
        **kwargs: Any,  # noqa: ANN401
    ) -> str:
        """Get a configuration value with inline comments stripped."""
        value = super().get(section, option, **kwargs)
        return _strip_inline_comment(value)
