"""Configuration loading and management for the quality gate.

Configuration sources are merged in priority order:
    1. Defaults (defined in GateConfig / ThresholdPolicy)
    2. Global config (~/.quality-gate.toml)
    3. Project config (./quality-gate.toml)
    4. Explicit config file
    5. Environment variables (QUALITY_GATE_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(max_method_lines=40, line_threshold=90)
    >>> config.max_method_lines
    40
    >>> config.thresholds.line_threshold
    90
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
FailOn = Literal["error", "warning"]
UnitScope = Literal["class", "sourcefile", "package"]

ENV_PREFIX = "QUALITY_GATE_"

_UNIT_SCOPES = ("class", "sourcefile", "package")
_FAIL_ON = ("error", "warning")
_VERBOSITIES = ("quiet", "normal", "verbose")


def _require(condition: bool, key: str, value: Any, reason: str) -> None:
    if not condition:
        raise InvalidConfigError(key, value, reason)


@dataclass(frozen=True)
class ThresholdPolicy:
    """Minimum coverage percentage per metric.

    A threshold of 0 makes the metric informational: it is computed and
    reported but can never fail the gate. Method and class coverage are
    informational by default.

    Attributes:
        line_threshold: Minimum LINE coverage percentage
        branch_threshold: Minimum BRANCH coverage percentage
        method_threshold: Minimum METHOD coverage percentage
        class_threshold: Minimum CLASS coverage percentage
    """

    line_threshold: int = 80
    branch_threshold: int = 70
    method_threshold: int = 0
    class_threshold: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            _require(
                isinstance(value, int) and not isinstance(value, bool),
                f.name,
                value,
                "must be an integer percentage",
            )
            _require(0 <= value <= 100, f.name, value, "must be between 0 and 100")

    def minimum_for(self, metric) -> int:
        """Threshold for a MetricType (matched by its value, e.g. ``"LINE"``)."""
        return getattr(self, f"{metric.value.lower()}_threshold")

    def with_overrides(self, **overrides: int) -> "ThresholdPolicy":
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update(overrides)
        return ThresholdPolicy(**values)


THRESHOLD_KEYS = tuple(f.name for f in fields(ThresholdPolicy))

DEFAULT_THRESHOLDS = ThresholdPolicy()


@dataclass(frozen=True)
class GateConfig:
    """Configuration for a gate run.

    All fields have documented defaults. Users typically override only a few
    via CLI flags or a ``quality-gate.toml`` file.

    Attributes:
        Structural checks:
            max_method_lines: Longest allowed method body, in lines
            doc_window: Blank lines tolerated between a Javadoc block and its declaration
            doc_scan_limit: Hard cap on lines examined by the documentation lookback
            max_line_length: Longest allowed line, in characters
            disallowed_indent: Character not allowed in indentation
            doc_exempt_patterns: Regexes of declaration names exempt from documentation

        File selection:
            include_extensions: Extensions that are structurally analyzed
            exclude_patterns: Glob patterns excluded from the scan
            test_file_patterns: Glob patterns identifying test sources
            check_test_structure: Run long-method/doc checks on test sources too
            max_file_size_mb: Larger files are skipped with a notice

        Coverage:
            unit_scope: Report element treated as a coverage unit
            thresholds: Per-metric minimum percentages

        Verdict and execution:
            fail_on: Lowest violation severity that fails the gate
            require_coverage: Fail when coverage could not be evaluated
            workers: Parallel scan workers (None = auto-detect)
            verbosity: Logging verbosity level
    """

    # Structural checks
    max_method_lines: int = 30
    doc_window: int = 5
    doc_scan_limit: int = 50
    max_line_length: int = 120
    disallowed_indent: str = "\t"
    doc_exempt_patterns: list[str] = field(default_factory=list)

    # File selection
    include_extensions: list[str] = field(default_factory=lambda: [".java", ".groovy"])
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "target/*",
            "build/*",
            "out/*",
            ".gradle/*",
            ".mvn/*",
            ".git/*",
            "node_modules/*",
            "generated-sources/*",
            "*.generated.*",
        ]
    )
    test_file_patterns: list[str] = field(
        default_factory=lambda: ["*Test.java", "*Tests.java", "*IT.java", "*Spec.groovy"]
    )
    check_test_structure: bool = False
    max_file_size_mb: float = 5.0

    # Coverage
    unit_scope: UnitScope = "class"
    thresholds: ThresholdPolicy = field(default_factory=ThresholdPolicy)

    # Verdict and execution
    fail_on: FailOn = "error"
    require_coverage: bool = False
    workers: Optional[int] = None
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        _require(self.max_method_lines >= 1, "max_method_lines", self.max_method_lines,
                 "must be at least 1")
        _require(self.doc_window >= 0, "doc_window", self.doc_window, "must be non-negative")
        _require(self.doc_scan_limit >= 1, "doc_scan_limit", self.doc_scan_limit,
                 "must be at least 1")
        _require(self.max_line_length >= 1, "max_line_length", self.max_line_length,
                 "must be at least 1")
        _require(len(self.disallowed_indent) <= 1, "disallowed_indent", self.disallowed_indent,
                 "must be a single character or empty")
        _require(bool(self.include_extensions), "include_extensions", self.include_extensions,
                 "must name at least one extension")
        for ext in self.include_extensions:
            _require(ext.startswith("."), "include_extensions", ext, "must start with '.'")
        _require(self.max_file_size_mb > 0, "max_file_size_mb", self.max_file_size_mb,
                 "must be positive")
        _require(self.unit_scope in _UNIT_SCOPES, "unit_scope", self.unit_scope,
                 f"must be one of {', '.join(_UNIT_SCOPES)}")
        _require(self.fail_on in _FAIL_ON, "fail_on", self.fail_on,
                 f"must be one of {', '.join(_FAIL_ON)}")
        _require(self.verbosity in _VERBOSITIES, "verbosity", self.verbosity,
                 f"must be one of {', '.join(_VERBOSITIES)}")
        if self.workers is not None:
            _require(self.workers >= 1, "workers", self.workers, "must be at least 1")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> GateConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.
            Threshold keys (``line_threshold`` ...) may be passed flat.

    Returns:
        Validated GateConfig instance

    Raises:
        InvalidConfigError: If a config file is invalid or a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".quality-gate.toml"
    if global_config.exists():
        _merge(merged, _load_toml_file(global_config), global_config)

    project_config = Path.cwd() / "quality-gate.toml"
    if project_config.exists():
        _merge(merged, _load_toml_file(project_config), project_config)

    if config_file is not None:
        if not config_file.exists():
            raise InvalidConfigError("config_file", config_file, "file not found")
        _merge(merged, _load_toml_file(config_file), config_file)

    _merge(merged, _load_env_vars(), None)

    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"

    _merge(merged, {k: v for k, v in overrides.items() if v is not None}, None)

    thresholds = merged.pop("thresholds", {})
    try:
        merged["thresholds"] = DEFAULT_THRESHOLDS.with_overrides(**thresholds)
    except TypeError as e:
        raise InvalidConfigError("thresholds", thresholds, str(e))

    try:
        return GateConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise InvalidConfigError("config", sorted(merged), str(e))


def _merge(merged: dict, source: dict, origin: Optional[Path]) -> None:
    """Fold one config source into ``merged``, routing threshold keys."""
    for key, value in source.items():
        if key == "thresholds":
            if not isinstance(value, dict):
                raise InvalidConfigError("thresholds", value, f"must be a table ({origin})")
            merged.setdefault("thresholds", {}).update(value)
        elif key in THRESHOLD_KEYS:
            merged.setdefault("thresholds", {})[key] = value
        else:
            merged[key] = value


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from QUALITY_GATE_* environment variables.

    Every GateConfig and ThresholdPolicy field may be set, e.g.
    ``QUALITY_GATE_MAX_METHOD_LINES=40`` or ``QUALITY_GATE_LINE_THRESHOLD=90``.
    List fields take comma-separated values.

    Returns:
        Dict of field_name -> parsed_value for any QUALITY_GATE_* vars found.
    """
    result: dict[str, Any] = {}

    for cls in (GateConfig, ThresholdPolicy):
        type_hints = get_type_hints(cls)
        for field_name in cls.__dataclass_fields__:
            env_key = f"{ENV_PREFIX}{field_name.upper()}"
            env_value = os.environ.get(env_key)
            if env_value is None:
                continue

            type_hint = type_hints.get(field_name)
            if type_hint is None or type_hint is ThresholdPolicy:
                continue

            try:
                parsed = _parse_env_value(env_value, type_hint)
            except ValueError as e:
                raise InvalidConfigError(env_key, env_value, str(e))
            if parsed is not None:
                result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list:
        return [item.strip() for item in value.split(",") if item.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        InvalidConfigError: If the file cannot be read or parsed
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Backport for Python 3.9-3.10, declared in setup.py
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise InvalidConfigError("config_file", path, str(e))


