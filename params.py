import logging
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_INPUT = "input.json"


@dataclass
class ReconstructionParams:
    inputs: List[str] = field(default_factory=lambda: [DEFAULT_INPUT])
    """Share documents to reconstruct, one secret each."""
    threshold: Optional[int] = None
    """Overrides the document's `keys.k` when set."""
    log_level: int = logging.WARNING

    @classmethod
    def from_args(cls, args) -> 'ReconstructionParams':
        verbose = getattr(args, "verbose", 0) or 0
        if getattr(args, "quiet", False):
            level = logging.ERROR
        elif verbose >= 2:
            level = logging.DEBUG
        elif verbose == 1:
            level = logging.INFO
        else:
            level = logging.WARNING
        inputs = list(getattr(args, "inputs", None) or [DEFAULT_INPUT])
        return cls(inputs=inputs,
                   threshold=getattr(args, "threshold", None),
                   log_level=level)
