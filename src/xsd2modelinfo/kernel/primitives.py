"""Mapping from XSD built-in types onto target system primitives."""

from typing import Dict, Optional

from .qname import QualifiedName
from .schema import XSD_NAMESPACE


SYSTEM_ANY = "System.Any"
SYSTEM_BOOLEAN = "System.Boolean"
SYSTEM_INTEGER = "System.Integer"
SYSTEM_LONG = "System.Long"
SYSTEM_DECIMAL = "System.Decimal"
SYSTEM_STRING = "System.String"
SYSTEM_DATE = "System.Date"
SYSTEM_DATETIME = "System.DateTime"
SYSTEM_TIME = "System.Time"


XSD_PRIMITIVES: Dict[str, str] = {
    "anyType": SYSTEM_ANY,
    "anySimpleType": SYSTEM_ANY,
    "anyAtomicType": SYSTEM_ANY,

    "boolean": SYSTEM_BOOLEAN,

    "decimal": SYSTEM_DECIMAL,
    "float": SYSTEM_DECIMAL,
    "double": SYSTEM_DECIMAL,

    "integer": SYSTEM_INTEGER,
    "int": SYSTEM_INTEGER,
    "short": SYSTEM_INTEGER,
    "byte": SYSTEM_INTEGER,
    "nonNegativeInteger": SYSTEM_INTEGER,
    "nonPositiveInteger": SYSTEM_INTEGER,
    "negativeInteger": SYSTEM_INTEGER,
    "positiveInteger": SYSTEM_INTEGER,
    "unsignedInt": SYSTEM_INTEGER,
    "unsignedShort": SYSTEM_INTEGER,
    "unsignedByte": SYSTEM_INTEGER,
    "long": SYSTEM_LONG,
    "unsignedLong": SYSTEM_LONG,

    "date": SYSTEM_DATE,
    "dateTime": SYSTEM_DATETIME,
    "dateTimeStamp": SYSTEM_DATETIME,
    "time": SYSTEM_TIME,

    # Everything textual collapses to String
    "string": SYSTEM_STRING,
    "normalizedString": SYSTEM_STRING,
    "token": SYSTEM_STRING,
    "language": SYSTEM_STRING,
    "Name": SYSTEM_STRING,
    "NCName": SYSTEM_STRING,
    "NMTOKEN": SYSTEM_STRING,
    "NMTOKENS": SYSTEM_STRING,
    "ID": SYSTEM_STRING,
    "IDREF": SYSTEM_STRING,
    "IDREFS": SYSTEM_STRING,
    "ENTITY": SYSTEM_STRING,
    "ENTITIES": SYSTEM_STRING,
    "QName": SYSTEM_STRING,
    "NOTATION": SYSTEM_STRING,
    "anyURI": SYSTEM_STRING,
    "base64Binary": SYSTEM_STRING,
    "hexBinary": SYSTEM_STRING,
    "duration": SYSTEM_STRING,
    "dayTimeDuration": SYSTEM_STRING,
    "yearMonthDuration": SYSTEM_STRING,
    "gYear": SYSTEM_STRING,
    "gYearMonth": SYSTEM_STRING,
    "gMonth": SYSTEM_STRING,
    "gMonthDay": SYSTEM_STRING,
    "gDay": SYSTEM_STRING,
}


def primitive_for(qname: QualifiedName) -> Optional[str]:
    """Target primitive for an XSD built-in, or None if unmapped / not built-in."""
    if qname.namespace != XSD_NAMESPACE:
        return None
    return XSD_PRIMITIVES.get(qname.local_name)
