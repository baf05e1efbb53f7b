"""
Conversion of LabChart unit texts to :mod:`quantities` units.

LabChart lets the user type any unit text ("mV", "mmHg", "BPM", "%", ...).
Texts that :mod:`quantities` understands become real units; the others
are treated as dimensionless and only kept as a label.
"""

import logging
import re

import quantities as pq

logger = logging.getLogger("labchartio")

# LabChart writes the micro sign, quantities spells it "u"
_MICRO_SIGNS = ("µ", "μ")

# quantities evaluates unit strings, only names combined with * / and
# integer powers are handed to it
_UNIT_NAME = r"[A-Za-z][A-Za-z0-9_]*"
_UNIT_PATTERN = re.compile(r"{name}(\s*(\*\*|\^)\s*-?\d+)?(\s*[*/]\s*{name}(\s*(\*\*|\^)\s*-?\d+)?)*"
                           .format(name=_UNIT_NAME))


def parse_units(text):
    """
    Return the :class:`quantities.Quantity` unit matching ``text``, or
    ``pq.dimensionless`` when the text is empty or unknown to quantities.
    """
    cleaned = text.strip()
    for sign in _MICRO_SIGNS:
        cleaned = cleaned.replace(sign, "u")
    if not cleaned:
        return pq.dimensionless
    if _UNIT_PATTERN.fullmatch(cleaned) is None:
        logger.debug("Unit %r is not a quantities expression, using dimensionless", text)
        return pq.dimensionless
    try:
        units = pq.Quantity(1.0, cleaned).units
    except (LookupError, SyntaxError, TypeError, ValueError, AttributeError):
        logger.debug("Unit %r is unknown to quantities, using dimensionless", text)
        return pq.dimensionless
    return units
