import typing
from enum import StrEnum

IdentityKey = typing.NewType("IdentityKey", str)
ExternalKey = typing.NewType("ExternalKey", str)


class Provenance(StrEnum):
    SUBJECT = "subject"
    AUTHOR = "author"
