from __future__ import annotations

from html import escape

from src.discharge.domain.models.fhir import Narrative
from src.discharge.domain.terminology import XHTML_NAMESPACE


def _envelope(inner: str, language: str) -> str:
    lang = escape(language, quote=True)
    return f'<div xmlns="{XHTML_NAMESPACE}" lang="{lang}" xml:lang="{lang}">{inner}</div>'


def paragraph(text: str | None) -> str:
    return f"<p>{escape(text or '', quote=False)}</p>"


def build_narrative(title: str, body_html: str, *, language: str) -> Narrative:
    """Wrap a resource summary in the generated XHTML narrative envelope.

    ``body_html`` is inserted as-is; build it from :func:`paragraph` so free
    text is escaped.
    """

    return Narrative(div=_envelope(f"<h3>{escape(title, quote=False)}</h3>{body_html}", language))


def section_narrative(text: str, *, language: str) -> Narrative:
    return Narrative(div=_envelope(paragraph(text), language))
