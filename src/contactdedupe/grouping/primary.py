"""Primary contact selection for duplicate groups."""

from collections.abc import Sequence

from contactdedupe.models import Contact


def select_primary(contacts: Sequence[Contact]) -> Contact:
    """Select the most complete contact of a group.

    The contact with the highest ``completeness_score`` wins; on a tie the
    contact seen first in ``contacts`` is kept.

    Parameters
    ----------
    contacts : Sequence[Contact]
        Group members, in member order.

    Returns
    -------
    Contact
        Primary contact.

    Raises
    ------
    ValueError
        If contacts is empty.
    """
    if not contacts:
        raise ValueError("Cannot select primary from empty contacts list")

    primary = contacts[0]
    best_score = primary.completeness_score()
    for contact in contacts[1:]:
        score = contact.completeness_score()
        if score > best_score:
            primary, best_score = contact, score

    return primary
