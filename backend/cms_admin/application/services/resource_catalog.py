"""Resource catalog — parses the YAML resource definitions into domain entities.

Executed once per process (cached by the dependency layer). Each YAML file
under the catalog directory is one navigation group.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import yaml
from pydantic import ValidationError

from cms_admin.application.schemas.catalog import CatalogFileSchema
from cms_admin.domain.entities import ResourceDefinition
from cms_admin.domain.exceptions import CatalogError, UnknownResourceError

logger = logging.getLogger(__name__)


class ResourceCatalog:
    """Immutable registry of resource definitions, ordered by group."""

    def __init__(self, definitions: list[ResourceDefinition]):
        self._definitions: dict[str, ResourceDefinition] = {}
        for definition in definitions:
            if definition.name in self._definitions:
                raise CatalogError(definition.group, f"duplicate resource name '{definition.name}'")
            self._definitions[definition.name] = definition
        self._check_lookups()

    def _check_lookups(self) -> None:
        for definition in self._definitions.values():
            for lookup in definition.lookups:
                if lookup.resource not in self._definitions:
                    raise CatalogError(
                        definition.name,
                        f"lookup '{lookup.name}' references unknown resource '{lookup.resource}'",
                    )

    def get(self, name: str) -> ResourceDefinition:
        try:
            return self._definitions[name]
        except KeyError:
            raise UnknownResourceError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[ResourceDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def groups(self) -> dict[str, list[ResourceDefinition]]:
        """Definitions grouped for navigation, preserving file order."""
        grouped: dict[str, list[ResourceDefinition]] = {}
        for definition in self._definitions.values():
            grouped.setdefault(definition.group, []).append(definition)
        return grouped


class CatalogLoader:
    """Loads every ``*.yaml`` file of a directory into a ResourceCatalog."""

    def __init__(self, catalog_dir: str | Path):
        self._catalog_dir = Path(catalog_dir)

    def load(self) -> ResourceCatalog:
        if not self._catalog_dir.is_dir():
            raise CatalogError(str(self._catalog_dir), "catalog directory does not exist")

        definitions: list[ResourceDefinition] = []
        for yaml_file in sorted(self._catalog_dir.glob("*.yaml")):
            parsed = self._parse_file(yaml_file)
            definitions.extend(r.to_entity(parsed.group) for r in parsed.resources)
            logger.debug("Loaded %d resources from %s", len(parsed.resources), yaml_file.name)

        catalog = ResourceCatalog(definitions)
        logger.info(
            "Resource catalog loaded: %d resources in %d groups",
            len(catalog),
            len(catalog.groups()),
        )
        return catalog

    def _parse_file(self, path: Path) -> CatalogFileSchema:
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise CatalogError(path.name, f"invalid YAML: {exc}") from exc

        if not isinstance(raw, dict):
            raise CatalogError(path.name, "expected a mapping with 'group' and 'resources'")

        try:
            return CatalogFileSchema.model_validate(raw)
        except ValidationError as exc:
            raise CatalogError(path.name, str(exc)) from exc
