"""Create/edit/delete helpers for people, cards and groups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..domain.updates import CardUpdate, GroupUpdate, PersonUpdate
from ..forms import CardForm, GroupForm, PersonForm, validate_form
from ..logging_config import get_logger
from ..models.card import Card
from ..models.group import Group
from ..models.person import Person

if TYPE_CHECKING:  # pragma: no cover
    from ..infra.store import EntityStore

logger = get_logger(__name__)


def create_person(store: "EntityStore", data: PersonForm | dict[str, Any]) -> Person:
    form = validate_form(PersonForm, data)
    person = store.persons.create(Person(name=form.name))
    logger.info("Person created", extra={"person_id": person.id})
    return person


def update_person(store: "EntityStore", person_id: str, data: PersonForm | dict[str, Any]) -> Person:
    form = validate_form(PersonForm, data)
    return store.persons.update(person_id, PersonUpdate(name=form.name))


def delete_person(store: "EntityStore", person_id: str) -> None:
    """Remove a person. Their historic splits and payments stay untouched."""
    store.persons.delete(person_id)
    logger.info("Person deleted", extra={"person_id": person_id})


def groups_for_person(store: "EntityStore", person_id: str) -> list[Group]:
    """Groups listing ``person_id`` as a member, newest first."""
    return [group for group in store.groups.list_all() if group.has_member(person_id)]


def create_card(store: "EntityStore", data: CardForm | dict[str, Any]) -> Card:
    form = validate_form(CardForm, data)
    card = store.cards.create(Card(name=form.name, type=form.type.value, color=form.color))
    logger.info("Card created", extra={"card_id": card.id, "card_type": card.type})
    return card


def update_card(store: "EntityStore", card_id: str, data: CardForm | dict[str, Any]) -> Card:
    form = validate_form(CardForm, data)
    return store.cards.update(
        card_id, CardUpdate(name=form.name, type=form.type.value, color=form.color)
    )


def delete_card(store: "EntityStore", card_id: str) -> None:
    """Remove a card; its transactions fall into their own orphan row."""
    store.cards.delete(card_id)
    logger.info("Card deleted", extra={"card_id": card_id})


def create_group(store: "EntityStore", data: GroupForm | dict[str, Any]) -> Group:
    form = validate_form(GroupForm, data)
    group = store.groups.create(
        Group(
            name=form.name,
            description=form.description,
            color=form.color,
            icon=form.icon,
            person_ids=form.person_ids,
        )
    )
    logger.info("Group created", extra={"group_id": group.id, "members": len(group.person_ids)})
    return group


def update_group(store: "EntityStore", group_id: str, data: GroupForm | dict[str, Any]) -> Group:
    form = validate_form(GroupForm, data)
    return store.groups.update(
        group_id,
        GroupUpdate(
            name=form.name,
            description=form.description,
            color=form.color,
            icon=form.icon,
            person_ids=form.person_ids,
        ),
    )
