"""Translation catalog for labels, titles and check messages.

Labels and titles may be stored as language keys (``COM_HEALTHCHECKER_*``)
and resolved to text only at serialization time. Unknown keys translate to
themselves, so plain-text labels pass through unchanged.
"""

import typing as t

DEFAULT_CATALOG: dict[str, str] = {
    # Status labels
    "COM_HEALTHCHECKER_STATUS_CRITICAL": "Critical",
    "COM_HEALTHCHECKER_STATUS_WARNING": "Warning",
    "COM_HEALTHCHECKER_STATUS_GOOD": "Good",
    # Categories
    "COM_HEALTHCHECKER_CATEGORY_SYSTEM": "System & Hosting",
    "COM_HEALTHCHECKER_CATEGORY_DATABASE": "Database",
    "COM_HEALTHCHECKER_CATEGORY_SECURITY": "Security",
    "COM_HEALTHCHECKER_CATEGORY_USERS": "Users",
    "COM_HEALTHCHECKER_CATEGORY_EXTENSIONS": "Extensions",
    "COM_HEALTHCHECKER_CATEGORY_PERFORMANCE": "Performance",
    "COM_HEALTHCHECKER_CATEGORY_SEO": "SEO",
    "COM_HEALTHCHECKER_CATEGORY_CONTENT": "Content Quality",
    # Runner messages
    "COM_HEALTHCHECKER_CHECK_ERROR": "Check error: %s",
    "COM_HEALTHCHECKER_CHECK_TIMEOUT": "Check did not finish within %s seconds.",
    "COM_HEALTHCHECKER_RUN_TIMEOUT": (
        "Check was not completed before the %s second limit for the whole run."
    ),
    "COM_HEALTHCHECKER_NO_CHECKS_AVAILABLE": (
        "No health checks are available. Make sure at least one health "
        "checker plugin is enabled."
    ),
    # Check titles
    "COM_HEALTHCHECKER_CHECK_DATABASE_CONNECTION_TITLE": "Database Connection",
    "COM_HEALTHCHECKER_CHECK_DATABASE_SERVER_VERSION_TITLE": "Database Server Version",
    "COM_HEALTHCHECKER_CHECK_SYSTEM_DISK_SPACE_TITLE": "Disk Space",
    "COM_HEALTHCHECKER_CHECK_SYSTEM_TEMP_DIRECTORY_TITLE": "Temp Directory",
    "COM_HEALTHCHECKER_CHECK_SYSTEM_LOG_FILE_SIZE_TITLE": "Log Directory Size",
    "COM_HEALTHCHECKER_CHECK_SYSTEM_PYTHON_VERSION_TITLE": "Python Version",
    "COM_HEALTHCHECKER_CHECK_MYSITESGURU_CONNECTION_TITLE": "mySites.guru Monitoring",
}


class Translator:
    def __init__(self, catalog: t.Mapping[str, str] | None = None) -> None:
        self._catalog: dict[str, str] = dict(DEFAULT_CATALOG)
        if catalog:
            self._catalog.update(catalog)

    def load(self, catalog: t.Mapping[str, str]) -> None:
        """Merge extra strings into the catalog; later loads win."""
        self._catalog.update(catalog)

    def has(self, key: str) -> bool:
        return key in self._catalog

    def translate(self, key: str) -> str:
        return self._catalog.get(key, key)

    def format(self, key: str, *args: t.Any) -> str:
        template = self.translate(key)
        if not args:
            return template
        try:
            return template % args
        except (TypeError, ValueError):
            return " ".join([template, *map(str, args)])

    __call__ = translate


default_translator = Translator()


__all__ = ["DEFAULT_CATALOG", "Translator", "default_translator"]
