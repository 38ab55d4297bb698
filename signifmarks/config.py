"""Default configuration for significance annotation runs."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path

from .errors import ConfigurationError

DEFAULT_SETTINGS_PATH = Path.home() / ".signifmarks" / "settings.json"


class LabelFormat(Enum):
    SIGNIF = "signif"          # "***"
    NUMERIC = "numeric"        # "< 0.001", "0.007", "0.50"
    RAW = "raw"                # str(p)
    SCIENTIFIC = "scientific"  # "p=1.20e-04"


# Labels used by ggpubr-style callers
_LABEL_ALIASES = {
    "p.signif": LabelFormat.SIGNIF,
    "p.format": LabelFormat.NUMERIC,
}


class PAdjustMethod(Enum):
    NONE = "none"
    HOLM = "holm"
    BONFERRONI = "bonferroni"
    FDR_BH = "fdr_bh"          # Benjamini-Hochberg


def parse_label_format(value: LabelFormat | str) -> LabelFormat:
    """Return *value* as a ``LabelFormat``, raising ``ConfigurationError``."""
    if isinstance(value, LabelFormat):
        return value
    key = str(value).strip().lower()
    if key in _LABEL_ALIASES:
        return _LABEL_ALIASES[key]
    try:
        return LabelFormat(key)
    except ValueError:
        valid = ", ".join([f.value for f in LabelFormat] + list(_LABEL_ALIASES))
        raise ConfigurationError(
            f"Unknown label format {value!r} (expected one of: {valid})."
        ) from None


def parse_p_adjust(value: PAdjustMethod | str | bool | None) -> PAdjustMethod:
    """Return *value* as a ``PAdjustMethod``.

    ``True`` selects Holm, ``False``/``None`` disables adjustment.
    """
    if isinstance(value, PAdjustMethod):
        return value
    if value is None or value is False:
        return PAdjustMethod.NONE
    if value is True:
        return PAdjustMethod.HOLM
    key = str(value).strip().lower()
    if key == "bh":
        key = "fdr_bh"
    try:
        return PAdjustMethod(key)
    except ValueError:
        valid = ", ".join(m.value for m in PAdjustMethod)
        raise ConfigurationError(
            f"Unknown p-value adjustment {value!r} (expected one of: {valid})."
        ) from None


@dataclass
class AnnotationConfig:
    """All user-configurable settings for a single annotation run."""

    # Statistics
    paired: bool = False
    p_adjust: PAdjustMethod = PAdjustMethod.NONE
    control_group: str | None = None  # only used when pairs are auto-generated

    # Labels
    label_format: LabelFormat = LabelFormat.SIGNIF

    # Bracket placement
    y_offset_multiplier: float = 1.05
    stagger_step: float = 0.1  # extra headroom per comparison index

    def __post_init__(self) -> None:
        self.label_format = parse_label_format(self.label_format)
        self.p_adjust = parse_p_adjust(self.p_adjust)
        if self.y_offset_multiplier <= 0:
            raise ConfigurationError(
                f"y_offset_multiplier must be positive, got {self.y_offset_multiplier}."
            )
        if self.stagger_step < 0:
            raise ConfigurationError(
                f"stagger_step must be non-negative, got {self.stagger_step}."
            )

    @property
    def adjust_p_values(self) -> bool:
        return self.p_adjust != PAdjustMethod.NONE

    # ---- persistence ----

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict."""
        d = asdict(self)
        d["label_format"] = self.label_format.value
        d["p_adjust"] = self.p_adjust.value
        # Control group is tied to one dataset
        d.pop("control_group", None)
        return d

    def save(self, path: Path | None = None) -> None:
        """Save current settings to a JSON file."""
        path = path or DEFAULT_SETTINGS_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: Path | None = None, strict: bool = False) -> AnnotationConfig:
        """Load settings from JSON, falling back to defaults for missing keys.

        By default a missing or unreadable file, or an unknown option value,
        silently falls back to defaults.  With ``strict=True`` those raise
        ``ConfigurationError`` instead.
        """
        path = path or DEFAULT_SETTINGS_PATH
        if not path.exists():
            if strict:
                raise ConfigurationError(f"Settings file not found: {path}")
            return cls()
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            if strict:
                raise ConfigurationError(f"Cannot read settings file {path}: {exc}") from exc
            return cls()
        if not isinstance(raw, dict):
            if strict:
                raise ConfigurationError(f"Settings file {path} must hold a JSON object.")
            return cls()
        enum_parsers = {
            "label_format": parse_label_format,
            "p_adjust": parse_p_adjust,
        }
        kwargs: dict = {}
        defaults = cls()
        for f in cls.__dataclass_fields__:
            if f == "control_group" or f not in raw:
                continue
            val = raw[f]
            if f in enum_parsers:
                try:
                    val = enum_parsers[f](val)
                except ConfigurationError:
                    if strict:
                        raise
                    val = getattr(defaults, f)
            kwargs[f] = val
        try:
            return cls(**kwargs)
        except (ConfigurationError, TypeError) as exc:
            if strict:
                raise ConfigurationError(f"Invalid settings in {path}: {exc}") from exc
            return cls()
