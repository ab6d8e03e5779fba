"""Asset identifiers and publish results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


class PublishMode(Enum):
    """How a staged asset is made visible in the public tree."""
    COPY = "copy"  # Always correct
    SYMLINK = "symlink"  # Link back into staging when both roots share a volume

    @classmethod
    def parse(cls, value: Union[str, "PublishMode"]) -> "PublishMode":
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower()
        try:
            return cls(raw)
        except ValueError:
            allowed = ", ".join(mode.value for mode in cls)
            raise ValueError(f"unknown publish mode {value!r} (expected one of: {allowed})")


_PARAM_KEYS = ("area", "theme", "locale", "module")


@dataclass(frozen=True)
class AssetParams:
    """Deployment parameters. Empty string means framework default."""

    area: str = ""
    theme: str = ""
    locale: str = ""
    module: str = ""

    @classmethod
    def from_mapping(cls, params: Optional[Mapping[str, Any]] = None) -> "AssetParams":
        """Build from a loose dict; unknown keys (e.g. ``publish``) are ignored."""
        if params is None:
            return cls()
        if isinstance(params, cls):
            return params
        values = {key: str(params.get(key) or "").strip() for key in _PARAM_KEYS}
        return cls(**values)

    def segments(self) -> Tuple[str, ...]:
        """Non-empty parameter values in path order."""
        return tuple(
            value for value in (self.area, self.theme, self.locale, self.module) if value
        )


@dataclass(frozen=True)
class LogicalAssetId:
    """Caller-facing asset name plus its deployment parameters."""

    file_name: str
    params: AssetParams = field(default_factory=AssetParams)


@dataclass(frozen=True)
class StaticAsset:
    """Asset created by the catalog for one deployment."""

    path: str  # Relative path in the public store
    source_path: str  # Relative path in the staging store
    params: AssetParams = field(default_factory=AssetParams)

    def get_path(self) -> str:
        return self.path


@dataclass(frozen=True)
class PublishedAsset:
    """Result of a publish operation."""

    path: str
    is_symlink: bool = False


@dataclass
class EntryFailure:
    """One failed entry of a batch operation."""

    target: str
    error: str
    error_type: str


@dataclass
class DeploymentReport:
    """Outcome of ``MaterializationService.deploy_files``."""

    deployed: List[str] = field(default_factory=list)
    failures: List[EntryFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deployed": list(self.deployed),
            "failures": [vars(item) for item in self.failures],
        }


@dataclass
class DeletionReport:
    """Outcome of ``MaterializationService.delete_files``."""

    deleted: List[str] = field(default_factory=list)
    failures: List[EntryFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deleted": list(self.deleted),
            "failures": [vars(item) for item in self.failures],
        }
