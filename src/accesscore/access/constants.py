"""Entity kinds and directory conventions of an IAM tree.

Provides:
- ``EntityType`` — user / group / service.
- ``ENTITY_BEHAVIOURS`` — entity type → directory, identity and inheritance rules.
- File and identity constants shared by the classifier and the walker.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntityType(str, Enum):
    """Kind of entity a definition file describes."""

    USER = "user"
    GROUP = "group"
    SERVICE = "service"


@dataclass(frozen=True)
class EntityBehaviour:
    """How an entity type is located, named and resolved."""

    directory: str  # parent directory name, e.g. "users"
    has_identity: bool  # whether an identity can be derived from the file name
    can_inherit: bool  # whether group inheritance applies


ENTITY_BEHAVIOURS: dict[EntityType, EntityBehaviour] = {
    EntityType.USER: EntityBehaviour(directory="users", has_identity=True, can_inherit=True),
    EntityType.GROUP: EntityBehaviour(directory="groups", has_identity=True, can_inherit=False),
    # Recognised, but identities for service accounts are not supported yet.
    EntityType.SERVICE: EntityBehaviour(directory="service-accounts", has_identity=False, can_inherit=False),
}

DIRECTORY_TO_ENTITY: dict[str, EntityType] = {
    behaviour.directory: entity for entity, behaviour in ENTITY_BEHAVIOURS.items()
}

USERS_DIR = ENTITY_BEHAVIOURS[EntityType.USER].directory
GROUPS_DIR = ENTITY_BEHAVIOURS[EntityType.GROUP].directory

# Group files are looked up in this order.
YAML_SUFFIXES: tuple[str, ...] = (".yml", ".yaml")

DEFAULT_EMAIL_DOMAIN = "ravelin.com"
DEFAULT_GROUP_PREFIX = "gcp-"

# ``custom/<name>`` expands to ``projects/<project>/roles/<name>``
CUSTOM_ROLE_PREFIX = "custom/"
PROJECT_ROLE_TEMPLATE = "projects/{project}/roles/{name}"


__all__ = [
    "CUSTOM_ROLE_PREFIX",
    "DEFAULT_EMAIL_DOMAIN",
    "DEFAULT_GROUP_PREFIX",
    "DIRECTORY_TO_ENTITY",
    "ENTITY_BEHAVIOURS",
    "EntityBehaviour",
    "EntityType",
    "GROUPS_DIR",
    "PROJECT_ROLE_TEMPLATE",
    "USERS_DIR",
    "YAML_SUFFIXES",
]
