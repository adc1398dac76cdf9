"""
Consent metadata normalizer -- VERIFY-PRIV-SVC-002
===================================================

Flattens a data subject presentation (purposes -> attributes -> access
types, plus the subject's consents) into one ``MetadataRecord`` per
combination the caller asked for, ready to render a consent page.

Matching
--------
Every combination is identified by an item key::

    {purposeId}/{attributeId}.{accessTypeId}

A combination is emitted only when its key is in the set built from the
request items.  Callers may name an attribute by its display name instead
of its id, so a miss on the id-based key is retried with
``{purposeId}/{attributeName}.{accessTypeId}``.  Records are always
registered under the id-based key.

Purpose-level combinations (purposes without attributes) use an empty
attribute segment, e.g. ``terms/.default``.

Reconciliation
--------------
Consents are matched on the same key shape, with missing attribute and
access type ids read as empty strings.  A matched record takes the consent,
its ``state`` as ``consent_type``, and ``ACTIVE`` or ``EXPIRED`` depending on
the consent ``status``.  Consents for combinations that were not emitted are
ignored.  A record's status never moves from ``ACTIVE`` back to ``EXPIRED``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from verify_privacy.core.stringUtils import get_or_default
from verify_privacy.schemas.assessment import RequestItem
from verify_privacy.schemas.consent import ConsentRecord, ConsentStatus
from verify_privacy.schemas.metadata import (
    AccessTypeBinding,
    DataSubjectPresentation,
    Metadata,
    MetadataRecord,
    MetadataStatus,
    PurposeDescriptor,
)

logger = logging.getLogger(__name__)

# Applied to purpose-level access types that omit these fields.
PURPOSE_LEVEL_LEGAL_CATEGORY = 4
PURPOSE_LEVEL_ASSENT_UI_DEFAULT = False


def item_key(
    purpose_id: str,
    attribute_id: str | None,
    access_type_id: str | None,
) -> str:
    """Return the ``purpose/attribute.accessType`` identity of a combination."""
    return (
        f"{purpose_id}/{get_or_default(attribute_id, '')}"
        f".{get_or_default(access_type_id, '')}"
    )


def item_key_set(items: Iterable[RequestItem]) -> set[str]:
    """Keys for already-normalized request items."""
    return {
        item_key(item.purpose_id, item.attribute_id, item.access_type_id)
        for item in items
    }


class _MetadataBuilder:
    """Accumulates records for one normalization run."""

    def __init__(self, item_keys: set[str], presentation: DataSubjectPresentation) -> None:
        self._item_keys = item_keys
        self._presentation = presentation
        self._records: dict[str, MetadataRecord] = {}
        self.metadata = Metadata()

    # -- lookups ------------------------------------------------------------

    def _attribute_name(self, attribute_id: str | None) -> str | None:
        if attribute_id is None:
            return None
        descriptor = self._presentation.attributes.get(attribute_id)
        return descriptor.name if descriptor is not None else None

    def _access_type_name(self, access_type_id: str) -> str | None:
        descriptor = self._presentation.access_types.get(access_type_id)
        return descriptor.name if descriptor is not None else None

    # -- record construction -------------------------------------------------

    def _register(
        self,
        key: str,
        purpose_id: str,
        purpose: PurposeDescriptor,
        attribute_id: str | None,
        access_type: AccessTypeBinding,
        *,
        legal_category: int | None,
        assent_ui_default: bool | None,
    ) -> None:
        if key in self._records:
            return

        record = MetadataRecord(
            purpose_id=purpose_id,
            purpose_name=purpose.name,
            attribute_id=attribute_id,
            attribute_name=self._attribute_name(attribute_id),
            access_type_id=access_type.id,
            access_type=self._access_type_name(access_type.id),
            default_consent_duration=purpose.default_consent_duration,
            assent_ui_default=assent_ui_default,
            legal_category=legal_category,
            terms_of_use_ref=purpose.terms_of_use.ref if purpose.terms_of_use else None,
        )
        self._records[key] = record

        if purpose.is_eula:
            self.metadata.eula.append(record)
        else:
            self.metadata.default.append(record)

    def add_purpose(self, purpose_id: str, purpose: PurposeDescriptor) -> None:
        if purpose.attributes is not None:
            self._add_attribute_combinations(purpose_id, purpose)
        else:
            self._add_purpose_combinations(purpose_id, purpose)

    def _add_attribute_combinations(self, purpose_id: str, purpose: PurposeDescriptor) -> None:
        for attribute in purpose.attributes or []:
            attribute_name = self._attribute_name(attribute.id)
            for access_type in attribute.access_types:
                key = item_key(purpose_id, attribute.id, access_type.id)
                if key not in self._item_keys:
                    if not attribute_name:
                        continue
                    alias = item_key(purpose_id, attribute_name, access_type.id)
                    if alias not in self._item_keys:
                        continue

                self._register(
                    key,
                    purpose_id,
                    purpose,
                    attribute.id,
                    access_type,
                    legal_category=access_type.legal_category,
                    assent_ui_default=access_type.assent_ui_default,
                )

    def _add_purpose_combinations(self, purpose_id: str, purpose: PurposeDescriptor) -> None:
        for access_type in purpose.access_types:
            key = item_key(purpose_id, None, access_type.id)
            if key not in self._item_keys:
                continue

            legal_category = access_type.legal_category
            if legal_category is None:
                legal_category = PURPOSE_LEVEL_LEGAL_CATEGORY
            assent_ui_default = access_type.assent_ui_default
            if assent_ui_default is None:
                assent_ui_default = PURPOSE_LEVEL_ASSENT_UI_DEFAULT

            self._register(
                key,
                purpose_id,
                purpose,
                None,
                access_type,
                legal_category=legal_category,
                assent_ui_default=assent_ui_default,
            )

    # -- reconciliation ------------------------------------------------------

    def reconcile(self, consent: ConsentRecord) -> None:
        key = item_key(consent.purpose_id, consent.attribute_id, consent.access_type_id)
        record = self._records.get(key)
        if record is None:
            logger.debug("Ignoring consent %s for unrequested item %s", consent.id, key)
            return

        status = (
            MetadataStatus.ACTIVE
            if consent.status == ConsentStatus.ACTIVE
            else MetadataStatus.EXPIRED
        )
        if record.status == MetadataStatus.ACTIVE and status != MetadataStatus.ACTIVE:
            return

        record.consent = consent
        record.consent_type = consent.state
        record.status = status


def normalize_metadata(
    item_keys: set[str],
    presentation: DataSubjectPresentation,
) -> Metadata:
    """Build the consent page metadata for the requested item keys.

    Args:
        item_keys: Keys of the requested items, see ``item_key_set``.
        presentation: Validated data subject presentation response.

    Returns:
        ``Metadata`` with matched records bucketed into ``eula`` and
        ``default``.  The records are new objects owned by the caller.
    """
    builder = _MetadataBuilder(item_keys, presentation)

    for purpose_key, purpose in presentation.purposes.items():
        builder.add_purpose(purpose.id or purpose_key, purpose)

    for consent in presentation.consents.values():
        builder.reconcile(consent)

    logger.debug(
        "Normalized metadata: %d eula, %d default records",
        len(builder.metadata.eula),
        len(builder.metadata.default),
    )
    return builder.metadata
