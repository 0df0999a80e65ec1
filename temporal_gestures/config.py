"""
Configuration management for the temporal gesture pipeline.
"""
import yaml
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional, Dict, Any


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    mirror: bool = True


@dataclass
class RecognizerConfig:
    """MediaPipe gesture recognizer settings."""
    model_asset_path: str = "models/gesture_recognizer.task"
    num_hands: int = 2
    min_hand_detection_confidence: float = 0.5
    min_hand_presence_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    def __post_init__(self):
        if self.num_hands < 1:
            raise ConfigError(f"num_hands must be >= 1, got {self.num_hands}")


@dataclass
class TemporalConfig:
    """Temporal gesture detection settings."""
    buffer_size: int = 30
    ema_alpha: float = 0.3  # lower = more smoothing
    majority_window_size: int = 5
    max_gap_size: int = 2  # frames
    swipe_min_dx: float = 0.1  # normalized palm travel
    point_y_offset: float = 0.3

    def __post_init__(self):
        if self.buffer_size < 1:
            raise ConfigError(f"buffer_size must be >= 1, got {self.buffer_size}")
        if not 0.0 < self.ema_alpha <= 1.0:
            raise ConfigError(f"ema_alpha must be in (0, 1], got {self.ema_alpha}")
        if self.majority_window_size not in (3, 5):
            raise ConfigError(f"majority_window_size must be 3 or 5, got {self.majority_window_size}")
        if self.max_gap_size < 0:
            raise ConfigError(f"max_gap_size must be >= 0, got {self.max_gap_size}")
        if self.swipe_min_dx < 0:
            raise ConfigError(f"swipe_min_dx must be >= 0, got {self.swipe_min_dx}")

    def updated(self, **options: Any) -> "TemporalConfig":
        """Return a validated copy with the given options replaced."""
        return _replace_known(self, options)


@dataclass
class ServiceConfig:
    """Frame loop settings."""
    loop_interval_ms: float = 16.0  # roughly one display refresh


@dataclass
class DisplayConfig:
    """Preview window settings."""
    show_window: bool = True
    show_landmarks: bool = True
    show_palm_center: bool = True
    window_name: str = "Temporal Gestures"


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    recognizer: RecognizerConfig = field(default_factory=RecognizerConfig)
    temporal: TemporalConfig = field(default_factory=TemporalConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object. Missing keys keep their defaults."""
    return Cfg(
        camera=_section(CameraConfig, data.get('camera')),
        recognizer=_section(RecognizerConfig, data.get('recognizer')),
        temporal=_section(TemporalConfig, data.get('temporal')),
        service=_section(ServiceConfig, data.get('service')),
        display=_section(DisplayConfig, data.get('display')),
        logging=_section(LoggingConfig, data.get('logging')),
    )


def _section(cls, values: Optional[Dict[str, Any]]):
    if values is None:
        return cls()
    if not isinstance(values, dict):
        raise ConfigError(f"Section for {cls.__name__} must be a mapping, got {type(values).__name__}")
    return _replace_known(cls(), values)


def _replace_known(instance, values: Dict[str, Any]):
    known = {f.name for f in fields(instance)}
    unknown = set(values) - known
    if unknown:
        raise ConfigError(f"Unknown {type(instance).__name__} option(s): {', '.join(sorted(unknown))}")
    # replace() re-runs __post_init__ validation
    return replace(instance, **values)
