"""Runtime settings for font fetching and rasterization.

Settings can be configured via environment variables or constructor
parameters. Constructor parameters take precedence over environment variables.
"""

import logging
import os
import sys
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_FONT_CSS_URL = "https://fonts.googleapis.com/css2"

# A desktop browser user agent makes the webfont service answer with woff2.
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

DEFAULT_FONT_FORMAT = "woff2"

# Installed font that renders the generic sans-serif family in rasters.
DEFAULT_SANS_SERIF_FAMILY = (
    "Arial" if sys.platform in ("darwin", "win32") else "DejaVu Sans"
)


@dataclass(frozen=True)
class RenderSettings:
    """Settings for remote font resolution and raster text fallback.

    Environment variables:
        DESIGN2SVG_FONT_CSS_URL: Base URL of the webfont CSS endpoint
            (default: https://fonts.googleapis.com/css2)
        DESIGN2SVG_USER_AGENT: User-Agent header sent with the CSS request
        DESIGN2SVG_FETCH_TIMEOUT: Network timeout in seconds (default: 0, no timeout)
        DESIGN2SVG_SANS_SERIF_FAMILY: Installed font used for the generic
            sans-serif family when rasterizing (default: Arial on macOS and
            Windows, DejaVu Sans elsewhere)

    Example:
        >>> settings = RenderSettings.default()
        >>> settings = RenderSettings(fetch_timeout=10)
    """

    font_css_url: str = DEFAULT_FONT_CSS_URL
    user_agent: str = DEFAULT_USER_AGENT
    fetch_timeout: int = 0
    font_format: str = DEFAULT_FONT_FORMAT
    sans_serif_family: str = DEFAULT_SANS_SERIF_FAMILY

    @classmethod
    def default(cls) -> "RenderSettings":
        """Create RenderSettings from environment variables.

        Raises:
            ValueError: If DESIGN2SVG_FETCH_TIMEOUT is not a valid integer.

        Note:
            A negative timeout is treated as 0 (no timeout) with a warning logged.
        """

        def parse_env_int(key: str, default: int) -> int:
            value_str = os.environ.get(key)
            if value_str is None:
                return default

            try:
                value = int(value_str)
            except ValueError as e:
                raise ValueError(
                    f"Environment variable {key}={value_str!r} is not a valid integer"
                ) from e

            if value < 0:
                logger.warning(
                    f"Environment variable {key}={value} is negative, "
                    "treating as 0 (no timeout)."
                )
                return 0

            return value

        return cls(
            font_css_url=os.environ.get(
                "DESIGN2SVG_FONT_CSS_URL", DEFAULT_FONT_CSS_URL
            ),
            user_agent=os.environ.get("DESIGN2SVG_USER_AGENT", DEFAULT_USER_AGENT),
            fetch_timeout=parse_env_int("DESIGN2SVG_FETCH_TIMEOUT", 0),
            sans_serif_family=os.environ.get(
                "DESIGN2SVG_SANS_SERIF_FAMILY", DEFAULT_SANS_SERIF_FAMILY
            ),
        )

    def is_timeout_enabled(self) -> bool:
        """Check if a network timeout is set."""
        return self.fetch_timeout > 0
