"""Configuration for markup parsing.

A single immutable-by-convention dataclass controls how the tree builder
treats top-level content, closing tag names and nesting depth.
"""

import json
from dataclasses import dataclass, fields, replace
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, Optional, Union


class RootPolicy(Enum):
    """What the tree builder does once a top-level node is complete."""

    SINGLE = auto()  # Exactly one root; later content raises MultipleRoots
    FIRST = auto()   # Return the first completed node, ignore the rest


@dataclass
class ParserConfig:
    """Configuration for tokenization and tree building."""

    root_policy: RootPolicy = RootPolicy.SINGLE
    check_tag_names: bool = False
    max_depth: Optional[int] = None
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if isinstance(self.root_policy, str):
            try:
                self.root_policy = RootPolicy[self.root_policy.upper()]
            except KeyError:
                raise ValueError(
                    f"root_policy must be one of "
                    f"{', '.join(p.name.lower() for p in RootPolicy)}"
                ) from None
        if not isinstance(self.root_policy, RootPolicy):
            raise ValueError("root_policy must be a RootPolicy")
        if self.max_depth is not None and self.max_depth <= 0:
            raise ValueError("max_depth must be > 0 or None")

    @classmethod
    def default(cls) -> "ParserConfig":
        """Create the default configuration (single root, names unchecked)."""
        return cls()

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Create configuration that also verifies closing tag names."""
        return cls(check_tag_names=True)

    @classmethod
    def legacy(cls) -> "ParserConfig":
        """Create configuration returning the first completed top-level node."""
        return cls(root_policy=RootPolicy.FIRST)

    def with_overrides(self, **changes: Any) -> "ParserConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from a plain dictionary.

        Args:
            data: Mapping of field names to values

        Returns:
            ParserConfig instance

        Raises:
            ValueError: If the mapping contains unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ParserConfig":
        """Load configuration from a JSON file."""
        with Path(path).open(encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a JSON object")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            "root_policy": self.root_policy.name.lower(),
            "check_tag_names": self.check_tag_names,
            "max_depth": self.max_depth,
            "correlation_id": self.correlation_id,
        }
