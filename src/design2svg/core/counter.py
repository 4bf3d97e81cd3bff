import collections
import logging

logger = logging.getLogger(__name__)


class AutoCounter:
    """Generate ids unique within one document.

    Every id carries the document namespace as a suffix so that fragments of
    independently built documents can be merged without collisions.
    """

    def __init__(self, namespace: str = "", delimiter: str = "-") -> None:
        self.names: collections.defaultdict[str, int] = collections.defaultdict(int)
        self.namespace = namespace
        self.delimiter = delimiter

    def get_id(self, base: str) -> str:
        """Get a unique ID based on the base name."""
        name = f"{base}{self.delimiter}{self.namespace}" if self.namespace else base
        self.names[name] += 1
        if self.names[name] > 1:
            logger.debug(f"Duplicate id {name!r}, adding a sequence number")
            return f"{name}{self.delimiter}{self.names[name]:g}"
        return name
