"""
TagShip — Tag and release-name template interpolation.

Templates use ``%s`` as the version placeholder: ``v%s`` → ``v1.2.0``,
``Release %s`` → ``Release 1.2.0``. A template without a placeholder is
returned unchanged.
"""

VERSION_PLACEHOLDER = "%s"


def format_template(template: str, version: str) -> str:
    return template.replace(VERSION_PLACEHOLDER, version)
