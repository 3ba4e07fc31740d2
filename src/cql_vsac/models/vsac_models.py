from enum import Enum
from typing import Any, Callable, Literal, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict


class Code(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    system: str
    version: Optional[str] = None


class ValueSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    version: Optional[str] = None
    codes: Tuple[Code, ...] = ()


class ValueSetReference(BaseModel):
    """A value set as declared by a CQL library (``valueset "Name": 'id'``)."""
    model_config = ConfigDict(frozen=True)

    id: str
    version: Optional[str] = None
    name: Optional[str] = None


class CanonicalKey(NamedTuple):
    """Store key derived from an OID, URN or VSAC FHIR URL."""
    oid: Optional[str]
    version: Optional[str] = None


class CodeSystemType(str, Enum):
    """How SVS concepts report their code system."""
    URL = "url"
    OID = "oid"
    BOTH = "both"


class DownloadOptions(BaseModel):
    svs_code_system_type: CodeSystemType = CodeSystemType.URL


class UrlTemplate(BaseModel):
    """Download over HTTP. For FHIR, ``{{oid}}`` in the template is replaced by the OID."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["url"] = "url"
    template: str


class CustomResolver(BaseModel):
    """
    Download through a caller-supplied function instead of HTTP.

    FHIR calls ``resolve(oid, version, offset, api_key)`` and expects one
    expansion page (a dict). SVS calls ``resolve(oid, version, api_key)`` and
    expects the XML text. Either may be a coroutine function.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"
    resolve: Callable[..., Any]


VSACAccessor = Union[UrlTemplate, CustomResolver]
