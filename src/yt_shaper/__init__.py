"""yt-shaper — response shaping for YouTube video, playlist and search data.

Built on the yt-dlp Python API with a strict layered architecture.
"""

import logging

from yt_shaper.helper import YouTubeHelper
from yt_shaper.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = ["YouTubeHelper", "__version__"]
