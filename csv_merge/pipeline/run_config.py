"""
Configuration dataclass for the CSV merge pipeline.

This module provides run configuration with JSON and YAML serialization
support so a run can be repeated from a saved file.
"""

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from csv_merge.DEFAULT_CONSTS import (
    DEFAULT_ENTRIES_PER_FILE,
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_BASE,
    DEFAULT_OUTPUT_DIR,
)
from csv_merge.data_prep.csv_splitter import CategoryLabel
from csv_merge.exceptions import ConfigError


@dataclass
class RunConfig:
    """Configuration for one merge/shuffle/split run.

    Parameters
    ----------
    input_dir : str
        Directory scanned for ``*.csv`` files
    output_dir : str
        Directory receiving the full exports and chunk files
    entries_per_file : int
        Maximum data rows per chunk file. Strings holding an integer are
        accepted and converted.
    category_base : str
        Category label base such as ``"Batch7"``; blank disables labeling
    output_base : str
        Chunk file name prefix, must not be blank
    random_seed : int, optional
        Shuffle seed; ``None`` uses OS entropy. Numeric strings are converted.
    show_progress : bool
        Show tqdm progress bars

    Raises
    ------
    ConfigError
        If ``entries_per_file`` is not a positive integer, ``output_base``
        is blank, ``random_seed`` is not a non-negative integer or a text
        field holds a non-text value

    Examples
    --------
    >>> config = RunConfig(input_dir="in", output_dir="out", entries_per_file=250,
    ...                    category_base="Batch1", output_base="Part")
    >>> config.save("out/run_config.json")
    >>> loaded = RunConfig.load("out/run_config.json")
    """

    input_dir: str = DEFAULT_INPUT_DIR
    output_dir: str = DEFAULT_OUTPUT_DIR
    entries_per_file: int = DEFAULT_ENTRIES_PER_FILE
    category_base: str = ""
    output_base: str = DEFAULT_OUTPUT_BASE
    random_seed: Optional[int] = None
    show_progress: bool = True

    def __post_init__(self):
        """Normalize and validate configuration values."""
        self.input_dir = self._parse_text("input_dir", self.input_dir) or DEFAULT_INPUT_DIR
        self.output_dir = self._parse_text("output_dir", self.output_dir) or DEFAULT_OUTPUT_DIR
        self.category_base = self._parse_text("category_base", self.category_base)
        self.output_base = self._parse_text("output_base", self.output_base)

        self.entries_per_file = self._parse_entries(self.entries_per_file)
        self.random_seed = self._parse_seed(self.random_seed)

        if not self.output_base:
            raise ConfigError("Output base filename cannot be empty.")

    @staticmethod
    def _parse_text(name: str, value: Any) -> str:
        """Trimmed text of a string or number field; ``None`` becomes ``""``.

        YAML reads values such as ``category_base: 7`` as integers, so ints
        are accepted and converted.
        """
        if value is None:
            return ""
        if isinstance(value, (str, Path)):
            return str(value).strip()
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        raise ConfigError(f"{name} must be a string, got {type(value).__name__}: {value!r}")

    @staticmethod
    def _parse_seed(value: Any) -> Optional[int]:
        if value is None:
            return None
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError as exc:
                raise ConfigError(f"Invalid random seed: {value!r}") from exc
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"Invalid random seed: {value!r}")
        return value

    @staticmethod
    def _parse_entries(value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid number for entries per file: {value!r}")
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError as exc:
                raise ConfigError(
                    f"Invalid number for entries per file: {value!r}"
                ) from exc
        if not isinstance(value, int) or value <= 0:
            raise ConfigError(f"Invalid number for entries per file: {value!r}")
        return value

    @property
    def add_category(self) -> bool:
        return bool(self.category_base)

    @property
    def category_label(self) -> CategoryLabel:
        """Parsed category prefix and start number."""
        return CategoryLabel.from_base(self.category_base)

    def save(self, path: Union[str, Path]) -> None:
        """Save configuration to a JSON file.

        Parameters
        ----------
        path : str or Path
            Output path
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(asdict(self), f, indent=2)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "RunConfig":
        """Load configuration from a JSON or YAML file.

        Files ending in ``.yaml`` or ``.yml`` are read with ``yaml.safe_load``,
        anything else as JSON. Unparseable files and unknown keys raise
        ``ConfigError``.

        Parameters
        ----------
        path : str or Path
            Path to the config file

        Returns
        -------
        RunConfig
            Loaded configuration object
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            try:
                if path.suffix.lower() in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
            except (json.JSONDecodeError, yaml.YAMLError) as exc:
                raise ConfigError(f"Could not parse config file {path}: {exc}") from exc

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunConfig":
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")

        return cls(**data)

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary."""
        return asdict(self)
