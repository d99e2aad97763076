"""Bundle: a container for a collection of resources."""

from typing import Annotated, ClassVar, List, Optional

from .. import valuesets
from ..datatypes import BackboneElement, Identifier, Signature
from ..elements import required
from ..model import rebuild_models
from ..primitives import Code, Decimal, Instant, String, UnsignedInt, Uri
from .resource import AnyResource, Resource


class Bundle(Resource):
    """A container for a collection of resources.

    ``entry.resource`` and ``entry.response.outcome`` hold any resource type;
    the class is chosen from the ``resourceType`` of the JSON object.
    """

    __resource_type__: ClassVar[str] = "Bundle"
    SEARCH_PARAMS: ClassVar[List[str]] = [
        "composition", "identifier", "message", "timestamp", "type",
    ]

    class Link(BackboneElement):
        relation: String
        url: Uri

    class Entry(BackboneElement):
        class Search(BackboneElement):
            mode: Annotated[Optional[Code], required(valuesets.SEARCH_ENTRY_MODE)] = None
            score: Optional[Decimal] = None

        class Request(BackboneElement):
            method: Annotated[Code, required(valuesets.HTTP_VERB)]
            url: Uri
            ifNoneMatch: Optional[String] = None
            ifModifiedSince: Optional[Instant] = None
            ifMatch: Optional[String] = None
            ifNoneExist: Optional[String] = None

        class Response(BackboneElement):
            status: String
            location: Optional[Uri] = None
            etag: Optional[String] = None
            lastModified: Optional[Instant] = None
            outcome: Optional[AnyResource] = None

        link: Optional[List["Bundle.Link"]] = None
        fullUrl: Optional[Uri] = None
        resource: Optional[AnyResource] = None
        search: Optional[Search] = None
        request: Optional[Request] = None
        response: Optional[Response] = None

    identifier: Optional[Identifier] = None
    type: Annotated[Code, required(valuesets.BUNDLE_TYPE)]
    timestamp: Optional[Instant] = None
    total: Optional[UnsignedInt] = None
    link: Optional[List[Link]] = None
    entry: Optional[List[Entry]] = None
    signature: Optional[Signature] = None


rebuild_models(Bundle)
