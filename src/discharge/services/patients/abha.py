from __future__ import annotations

import json
from typing import Any, Iterable, List, Optional

from src.discharge.domain.models.patient import (
    AbhaEntry,
    AbhaOption,
    OpaqueAbhaEntry,
    PatientCandidate,
    PlainAbhaEntry,
    TaggedAbhaEntry,
)


def raw_abha_entries(patient: PatientCandidate) -> List[Any]:
    """Pick the ABHA address list from a candidate record.

    ``additional_attributes.abha_addresses`` wins over the flat top-level
    ``abha_addresses``; anything that is not a list counts as absent.
    """

    attributes = patient.additional_attributes
    nested = attributes.get("abha_addresses") if isinstance(attributes, dict) else None
    if isinstance(nested, list):
        return nested
    if isinstance(patient.abha_addresses, list):
        return patient.abha_addresses
    return []


def parse_abha_entry(raw: Any) -> Optional[AbhaEntry]:
    """Classify one raw entry; returns None for entries that carry nothing.

    Objects without an ``address`` are kept as their JSON text. That mirrors
    the upstream feed's behaviour and may hide malformed input, see
    DESIGN.md.
    """

    if isinstance(raw, str):
        return PlainAbhaEntry(text=raw) if raw else None
    if isinstance(raw, dict):
        address = raw.get("address")
        if address:
            return TaggedAbhaEntry(address=str(address), is_primary=bool(raw.get("isPrimary")))
        return OpaqueAbhaEntry(
            text=json.dumps(raw, separators=(",", ":"), default=str),
            is_primary=bool(raw.get("isPrimary")),
        )
    if isinstance(raw, list):
        return OpaqueAbhaEntry(text=json.dumps(raw, separators=(",", ":"), default=str))
    return None


def to_option(entry: AbhaEntry) -> AbhaOption:
    if isinstance(entry, PlainAbhaEntry):
        return AbhaOption(value=entry.text, label=entry.text, primary=False)
    if isinstance(entry, TaggedAbhaEntry):
        label = f"{entry.address} (primary)" if entry.is_primary else entry.address
        return AbhaOption(value=entry.address, label=label, primary=entry.is_primary)
    return AbhaOption(value=entry.text, label=entry.text, primary=entry.is_primary)


def sort_options(options: Iterable[AbhaOption]) -> List[AbhaOption]:
    """Primary entries first, then by value; duplicates by value are dropped."""

    ordered = sorted(options, key=lambda o: (not o.primary, o.value))
    seen: set[str] = set()
    unique: List[AbhaOption] = []
    for option in ordered:
        if option.value in seen:
            continue
        seen.add(option.value)
        unique.append(option)
    return unique


def normalize_abha_addresses(patient: PatientCandidate) -> List[AbhaOption]:
    entries = (parse_abha_entry(raw) for raw in raw_abha_entries(patient))
    return sort_options(to_option(e) for e in entries if e is not None)


def default_abha_address(patient: PatientCandidate) -> Optional[str]:
    options = normalize_abha_addresses(patient)
    return options[0].value if options else None
