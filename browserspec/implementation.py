# browserspec/implementation.py
"""
The Implementation model: which browser to launch, how to construct it, and
which guard conditions the resulting browser satisfies.
"""
import copy
import platform as _platform
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from browserspec.exceptions import ConfigurationError, GuardError

GUARD_CONDITION_KEYS = ("browser", "platform", "headless", "remote")

# browserName reported by the driver when it differs from our browser name.
_CAPABILITY_NAMES = {"edge": "msedge"}

_PLATFORMS = {"Linux": "linux", "Darwin": "mac", "Windows": "windows"}


def detect_platform() -> str:
    """Returns the guard name of the operating system we are running on."""
    system = _platform.system()
    return _PLATFORMS.get(system, system.lower())


def _normalize(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _render(value: Any) -> Any:
    # Selenium option objects only show their address in repr()
    to_capabilities = getattr(value, "to_capabilities", None)
    if callable(to_capabilities):
        return to_capabilities()
    return value


class Implementation(BaseModel):
    """Configuration object identifying which browser to drive for a run.

    :ivar name: Implementation family name.
    :vartype name: str
    :ivar browser_name: Browser to drive, or None when no browser is configured.
    :vartype browser_name: Optional[str]
    :ivar browser_class: Callable that builds a browser, usually a Selenium WebDriver class.
    :vartype browser_class: Optional[Callable[..., Any]]
    :ivar browser_args: Positional constructor arguments.
    :vartype browser_args: List[Any]
    :ivar browser_kwargs: Keyword constructor arguments.
    :vartype browser_kwargs: Dict[str, Any]
    :ivar driver_info: Display string describing the driver.
    :vartype driver_info: str
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    name: str = "webdriver"
    browser_name: Optional[str] = None
    browser_class: Optional[Callable[..., Any]] = None
    browser_args: List[Any] = Field(default_factory=list)
    browser_kwargs: Dict[str, Any] = Field(default_factory=dict)
    driver_info: str = ""
    platform: str = Field(default_factory=detect_platform)
    headless: bool = False
    remote: bool = False

    def resolve_browser_class(self) -> Callable[..., Any]:
        if self.browser_class is None:
            raise ConfigurationError(
                f"no browser class configured for implementation {self.name!r}"
            )
        return self.browser_class

    @property
    def capability_name(self) -> Optional[str]:
        if self.browser_name is None:
            return None
        return _CAPABILITY_NAMES.get(self.browser_name, self.browser_name)

    def guard_conditions(self) -> Dict[str, Any]:
        return {
            "browser": self.browser_name,
            "platform": self.platform,
            "headless": self.headless,
            "remote": self.remote,
        }

    def matches_guard(self, conditions: Dict[str, Any]) -> bool:
        """Checks whether this implementation satisfies a guard's conditions.

        Every key named by the guard must match; keys the guard leaves out are
        ignored. A list value matches when any of its entries does.

        :param conditions: Guard conditions, e.g. ``{"browser": ["chrome", "edge"]}``.
        :type conditions: Dict[str, Any]
        :return: True if all named conditions match.
        :rtype: bool
        :raises GuardError: If a condition key is not a known guard condition.
        """
        current = self.guard_conditions()
        for key, expected in conditions.items():
            if key not in current:
                raise GuardError(
                    f"unknown guard condition {key!r}; expected one of {GUARD_CONDITION_KEYS}"
                )
            candidates = expected if isinstance(expected, (list, tuple, set)) else [expected]
            if _normalize(current[key]) not in {_normalize(c) for c in candidates}:
                return False
        return True

    def matching_guards_in(self, guards: Iterable[Any]) -> List[Any]:
        """Returns the recorded guards (objects with `.conditions`) that apply here."""
        return [
            guard
            for guard in guards
            if not guard.conditions or self.matches_guard(guard.conditions)
        ]

    def inspect_args(self) -> str:
        lines = [f"  {index}: {_render(arg)}" for index, arg in enumerate(self.browser_args)]
        lines.extend(f"  {key}: {_render(value)}" for key, value in self.browser_kwargs.items())
        return "\n".join(lines) if lines else "  (no arguments)"

    def clone(self) -> "Implementation":
        return self.model_copy(deep=True)

    def constructor_arguments(self) -> tuple[List[Any], Dict[str, Any]]:
        """Returns fresh copies of the mutable constructor arguments.

        Dicts, lists and Selenium option objects are copied so a browser
        cannot leak changes into the next example's arguments.
        """
        args = [_duplicate(arg) for arg in self.browser_args]
        kwargs = {key: _duplicate(value) for key, value in self.browser_kwargs.items()}
        return args, kwargs


def _duplicate(value: Any) -> Any:
    if isinstance(value, (dict, list)) or hasattr(value, "to_capabilities"):
        return copy.deepcopy(value)
    return value
