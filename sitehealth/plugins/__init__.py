from sitehealth.config import HealthCheckerSettings
from sitehealth.events import EventDispatcher
from sitehealth.i18n import Translator

from ._base import HealthCheckerPlugin
from .core import CorePlugin
from .mysitesguru import MySitesGuruPlugin

DEFAULT_PLUGINS: tuple[type[HealthCheckerPlugin], ...] = (CorePlugin, MySitesGuruPlugin)


def register_default_plugins(
    dispatcher: EventDispatcher,
    settings: HealthCheckerSettings | None = None,
    translator: Translator | None = None,
) -> list[HealthCheckerPlugin]:
    translator = translator or Translator()
    plugins = [cls(settings=settings, translator=translator) for cls in DEFAULT_PLUGINS]
    for plugin in plugins:
        plugin.register(dispatcher)
    return plugins


__all__ = [
    "DEFAULT_PLUGINS",
    "CorePlugin",
    "HealthCheckerPlugin",
    "MySitesGuruPlugin",
    "register_default_plugins",
]
