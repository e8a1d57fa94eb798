"""Default configuration parameters for the marker lifecycle engine."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MarkerParams:
    """Marker appearance and placement."""
    buy_icon: str = "up_arrow"
    sell_icon: str = "down_arrow"
    buy_color: Optional[str] = None                  # None -> host theme buy color
    sell_color: Optional[str] = None                 # None -> host theme sell color

    # Vertical offset applied at confirmation
    draw_margin: Optional[float] = None              # Absolute price offset
    draw_margin_fraction: float = 0.05               # Of visible price range when draw_margin unset

    # Mirror the latest signal for visual-backtest trainers
    trainer_link: bool = False


@dataclass(frozen=True)
class NavigationParams:
    """Marker navigation parameters."""
    jump_margin: int = 1                             # Bars between marker and right edge
    newest_overscroll: int = 20                      # Empty bars left after the newest bar
    range_margin_fraction: float = 0.05              # Vertical padding after a jump
    show_navigation_buttons: bool = True


@dataclass(frozen=True)
class AlertParams:
    """Alert policy and outputs."""
    policy: str = "update"                           # none|first_time|update|first_and_update|every_time
    sound_resource: str = ""                         # Empty disables sound
    sound_directory: str = "C:\\Windows\\Media"       # Base for bare sound file names
    alert_color: Optional[str] = None                # Highlight color, None keeps host default


@dataclass(frozen=True)
class SignalParams:
    """Moving-average crossover evaluator parameters."""
    short_period: int = 25
    long_period: int = 75


@dataclass(frozen=True)
class SignToolsConfig:
    """Complete engine configuration."""
    marker: MarkerParams
    navigation: NavigationParams
    alert: AlertParams
    signal: SignalParams


def get_default_config() -> SignToolsConfig:
    """Get the default configuration instance."""
    return SignToolsConfig(
        marker=MarkerParams(),
        navigation=NavigationParams(),
        alert=AlertParams(),
        signal=SignalParams(),
    )
