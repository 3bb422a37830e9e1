"""Parameter store: current weights and score models.

Lives only in memory. ``export`` produces a versioned snapshot, ``import_bundle``
validates a snapshot completely before swapping it in, so a rejected bundle
never leaves the store half-updated.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from sunset_engine.models.scoring import (
    BUNDLE_VERSION,
    FACTORS,
    ModelMap,
    ParameterBundle,
    ThresholdDownModel,
    ThresholdUpModel,
    TriangularModel,
    WeightVector,
)

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS = {
    "high_cloud": 0.35,
    "mid_cloud": 0.25,
    "low_cloud": 0.15,
    "precipitation": 0.10,
    "visibility": 0.07,
    "wind": 0.08,
}

DEFAULT_MODELS = {
    "high_cloud": TriangularModel(ideal=50, tolerance=20),
    "mid_cloud": TriangularModel(ideal=40, tolerance=20),
    "low_cloud": TriangularModel(ideal=0, tolerance=20),
    "precipitation": ThresholdDownModel(min=0, max=100),
    "visibility": ThresholdUpModel(threshold=5, full=15),  # km
    "wind": TriangularModel(ideal=4, tolerance=4),  # m/s
}


class BundleValidationError(ValueError):
    """A parameter bundle failed validation; the store was not modified."""


def default_bundle() -> ParameterBundle:
    return ParameterBundle(
        version=BUNDLE_VERSION,
        weights=WeightVector(**DEFAULT_WEIGHTS),
        models=ModelMap(**DEFAULT_MODELS),
    )


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "bundle"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def parse_bundle(data: dict | str | bytes) -> ParameterBundle:
    """Validate a bundle given as a dict or a JSON document.

    Raises:
        BundleValidationError: with a readable reason for every problem found.
    """
    try:
        if isinstance(data, (str, bytes)):
            return ParameterBundle.model_validate_json(data)
        if not isinstance(data, dict):
            raise BundleValidationError(f"bundle must be an object, got {type(data).__name__}")
        return ParameterBundle.model_validate(data)
    except ValidationError as e:
        raise BundleValidationError(_describe(e)) from e


class ParameterStore:
    """Holds the active ParameterBundle.

    The bundle itself is immutable; every mutation swaps ``self._bundle`` in a
    single assignment. Callers sharing a store across threads must serialize
    access themselves.
    """

    def __init__(self, bundle: ParameterBundle | None = None):
        self._bundle = bundle or default_bundle()

    @property
    def bundle(self) -> ParameterBundle:
        return self._bundle

    def reset(self) -> ParameterBundle:
        self._bundle = default_bundle()
        logger.info("Parameters reset to defaults")
        return self._bundle

    def normalize_weights(self) -> ParameterBundle:
        """Scale weights to sum to 1.0. No-op when they sum to zero."""
        weights = self._bundle.weights
        if weights.total() == 0:
            logger.warning("Weights sum to zero, normalization skipped")
            return self._bundle
        self._bundle = self._bundle.model_copy(update={"weights": weights.normalized()})
        return self._bundle

    def set_weight(self, factor: str, value: float) -> ParameterBundle:
        if factor not in FACTORS:
            raise BundleValidationError(f"unknown factor {factor!r}")
        data = self.export()
        data["weights"][factor] = value
        self._bundle = parse_bundle(data)
        return self._bundle

    def export(self) -> dict:
        return self._bundle.model_dump(mode="json")

    def import_bundle(self, data: dict | str | bytes) -> ParameterBundle:
        bundle = parse_bundle(data)
        self._bundle = bundle
        logger.info("Imported parameter bundle (version %d)", bundle.version)
        return bundle

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.export(), indent=2), encoding="utf-8")
        logger.info("Parameters exported to %s", path)
        return path

    def load(self, path: str | Path) -> ParameterBundle:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise BundleValidationError(f"cannot read {path}: {e}") from e
        return self.import_bundle(text)
