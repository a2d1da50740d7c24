"""
Layout configuration resolver

Turns symbolic sizing options ('auto', 'match') into concrete pixel
constants and notifies observers about configuration changes.
"""
from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, List, Mapping, Optional
import logging
import re

from ..config import GridConfig, InteractionConfig
from ..types import GridEventName
from .types import ResolvedLayout

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')

_OPTION_ALIASES = {
    'mobile_break_point': 'mobile_breakpoint',
}

# Keys the resolver computes itself; accepted from legacy option dicts but ignored
_DERIVED_OPTIONS = {'is_mobile', 'cur_width', 'cur_col_width', 'cur_row_height', 'grid_height'}


@dataclass(frozen=True)
class GridEvent:
    """
    Notification delivered to grid observers

    Attributes:
        name: 'draggable-changed', 'resizable-changed' or 'grid-resized'
        payload: Event data (the new InteractionConfig, or (width, height))
    """
    name: GridEventName
    payload: Any = None


GridObserver = Callable[[GridEvent], None]


def _option_key(key: str) -> str:
    snake = _CAMEL_BOUNDARY.sub('_', key).lower()
    return _OPTION_ALIASES.get(snake, snake)


class LayoutConfigResolver:
    """
    Resolves pixel constants from a GridConfig and a container width

    The resolver shares its GridConfig with the placement engine; option
    overrides are applied to that instance in place.
    """

    def __init__(self, config: Optional[GridConfig] = None) -> None:
        """
        Initialize resolver

        Args:
            config: Grid configuration (uses defaults if None)
        """
        self.config: GridConfig = config or GridConfig()
        self.container_width: Optional[float] = None
        self.layout: Optional[ResolvedLayout] = None
        self._observers: List[GridObserver] = []

    # ------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------

    def subscribe(self, observer: GridObserver) -> Callable[[], None]:
        """
        Register an observer for configuration and resize notifications

        Returns:
            Function that unregisters the observer
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def clear_observers(self) -> None:
        """Unregister every observer"""
        self._observers.clear()

    def notify(self, name: GridEventName, payload: Any = None) -> None:
        """Deliver an event to every registered observer"""
        event = GridEvent(name, payload)
        logger.debug(f"Notifying {len(self._observers)} observer(s): {name}")
        for observer in list(self._observers):
            observer(event)

    # ------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------

    def resolve(self, container_width: Optional[float] = None) -> ResolvedLayout:
        """
        Resolve pixel constants

        Args:
            container_width: Measured container width (px); the last known
                width is reused when None

        Returns:
            ResolvedLayout for the current configuration

        Raises:
            ValueError: if width is 'auto' and no container width is known
        """
        if container_width is not None:
            self.container_width = container_width

        cfg = self.config
        margin_top, margin_left = cfg.margins

        if cfg.width == 'auto':
            if self.container_width is None:
                raise ValueError("Container width is required when width is 'auto'")
            cur_width = float(self.container_width)
        else:
            cur_width = float(cfg.width)

        if cfg.col_width == 'auto':
            cur_col_width = (cur_width - margin_left) / cfg.columns
        else:
            cur_col_width = float(cfg.col_width)

        if cfg.row_height == 'match':
            cur_row_height = cur_col_width
        else:
            cur_row_height = float(cfg.row_height)

        self.layout = ResolvedLayout(
            cur_width=cur_width,
            cur_col_width=cur_col_width,
            cur_row_height=cur_row_height,
            margin_top=margin_top,
            margin_left=margin_left,
            is_mobile=cur_width <= cfg.mobile_breakpoint,
        )
        logger.debug(f"Resolved layout: width={cur_width:.1f}, col={cur_col_width:.1f}, "
                     f"row={cur_row_height:.1f}, mobile={self.layout.is_mobile}")
        return self.layout

    @staticmethod
    def normalize_options(options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> Dict[str, Any]:
        """Merge option mappings and keywords under snake_case names"""
        return {_option_key(key): value for key, value in {**(options or {}), **overrides}.items()}

    def set_options(self, options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> ResolvedLayout:
        """
        Merge option overrides into the configuration and re-resolve

        Keys may be snake_case or camelCase. 'draggable' and 'resizable'
        accept an InteractionConfig or a dict of its fields; a change to
        either is announced to observers.

        Args:
            options: Mapping of option overrides
            **overrides: Further overrides as keyword arguments

        Returns:
            Newly resolved layout

        Raises:
            ValueError: on an unknown option
        """
        merged = self.normalize_options(options, **overrides)

        known = {f.name for f in fields(GridConfig)}
        changed_interactions = []

        for key, value in merged.items():
            if key in _DERIVED_OPTIONS:
                logger.warning(f"Ignoring derived option '{key}'")
                continue
            if key not in known:
                raise ValueError(f"Unknown grid option: {key}")

            if key in ('draggable', 'resizable'):
                current: InteractionConfig = getattr(self.config, key)
                updated = value if isinstance(value, InteractionConfig) else replace(current, **value)
                if updated != current:
                    changed_interactions.append(key)
                setattr(self.config, key, updated)
            elif key == 'margins':
                self.config.margins = tuple(value)  # type: ignore[assignment]
            else:
                setattr(self.config, key, value)

        layout = self.resolve()

        for key in changed_interactions:
            self.notify(f'{key}-changed', getattr(self.config, key))  # type: ignore[arg-type]

        return layout
