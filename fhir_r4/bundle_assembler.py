"""Assembly of resources into collection, transaction and batch bundles."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .config import BUNDLE_DEFAULTS
from .resources import Bundle, Resource

logger = logging.getLogger(__name__)

BUNDLE_TYPES = ("transaction", "batch", "collection")
REQUEST_METHODS = ("POST", "PUT", "CONDITIONAL")


def _identifier_query(resource: Resource) -> Optional[str]:
    """``identifier=system|value`` search for the first usable identifier."""
    for ident in getattr(resource, "identifier", None) or []:
        if ident.value:
            if ident.system:
                return f"identifier={ident.system}|{ident.value}"
            return f"identifier={ident.value}"
    return None


def _mapping_key(resource: Resource) -> str:
    return f"{resource.get_resource_type()}/{resource.id}"


def _rewrite_references(resource: Resource, urn_mapping: Dict[str, str]) -> None:
    """Point ``Type/id`` references at the ``urn:uuid`` of a POSTed resource."""
    for _, info, value in resource.each_element():
        if info.type_code == "Reference" and value.reference in urn_mapping:
            value.reference = f"urn:uuid:{urn_mapping[value.reference]}"


class BundleAssembler:
    """Builds Bundle resources from lists of resources."""

    def create_bundle(
        self,
        resources: List[Resource],
        bundle_type: str = BUNDLE_DEFAULTS["TYPE"],
        request_method: str = BUNDLE_DEFAULTS["REQUEST_METHOD"],
        urn_mapping: Optional[Dict[str, str]] = None
    ) -> Bundle:
        """Wrap resources in one bundle.

        Args:
            resources: Resources to add, in entry order
            bundle_type: "transaction", "batch" or "collection"
            request_method: HTTP method for transaction and batch entries
                ("POST", "PUT" or "CONDITIONAL")
            urn_mapping: ``Type/id`` of a resource to its URN UUID; every
                POSTed resource with an id is added to it

        Returns:
            The assembled Bundle

        Raises:
            ValueError: If the bundle type or request method is not supported
        """
        if bundle_type not in BUNDLE_TYPES:
            raise ValueError(f"Invalid bundle type: {bundle_type}")

        posting = bundle_type != "collection" and request_method == "POST"
        if bundle_type != "collection" and request_method not in REQUEST_METHODS:
            raise ValueError(f"Invalid request method: {request_method}")

        mapping = urn_mapping if urn_mapping is not None else {}
        if posting:
            # ids are assigned up front so references between entries can be rewritten
            for resource in resources:
                if resource.id and _mapping_key(resource) not in mapping:
                    mapping[_mapping_key(resource)] = str(uuid.uuid4())

        entries = [
            self._create_bundle_entry(resource, bundle_type, request_method, mapping)
            for resource in resources
        ]
        logger.debug("Assembled %s bundle with %d entries", bundle_type, len(entries))
        return Bundle(
            id=str(uuid.uuid4()),
            type=bundle_type,
            timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
            entry=entries or None,
        )

    def create_bundles(
        self,
        resources: List[Resource],
        bundle_type: str = BUNDLE_DEFAULTS["TYPE"],
        bundle_size: int = BUNDLE_DEFAULTS["MAX_SIZE"],
        request_method: str = BUNDLE_DEFAULTS["REQUEST_METHOD"],
        urn_mapping: Optional[Dict[str, str]] = None
    ) -> List[Bundle]:
        """Wrap resources in as many bundles as ``bundle_size`` requires.

        One URN mapping is shared by all bundles, so a reference in a later
        bundle still resolves to a resource POSTed in an earlier one.  An
        empty resource list gives one empty bundle.
        """
        if bundle_size < 1:
            raise ValueError(f"Invalid bundle size: {bundle_size}")

        mapping = urn_mapping if urn_mapping is not None else {}
        chunks = [resources[start:start + bundle_size] for start in range(0, len(resources), bundle_size)]
        return [
            self.create_bundle(chunk, bundle_type, request_method, mapping)
            for chunk in chunks or [[]]
        ]

    def _create_bundle_entry(
        self,
        resource: Resource,
        bundle_type: str,
        request_method: str,
        urn_mapping: Dict[str, str]
    ) -> Bundle.Entry:
        """Entry for one resource.

        POSTed resources are copied without their id, get a ``urn:uuid``
        fullUrl and have references to other POSTed resources rewritten to
        those URNs.  The input resource is left untouched.
        """
        resource_type = resource.get_resource_type()

        if bundle_type != "collection" and request_method == "POST":
            urn_uuid = urn_mapping.get(_mapping_key(resource)) if resource.id else None
            posted = resource.model_copy(deep=True)
            posted.id = None
            _rewrite_references(posted, urn_mapping)
            entry = Bundle.Entry(fullUrl=f"urn:uuid:{urn_uuid or uuid.uuid4()}", resource=posted)
        else:
            entry = Bundle.Entry(fullUrl=f"urn:uuid:{resource.id or uuid.uuid4()}", resource=resource)

        if bundle_type == "collection":
            return entry

        query = _identifier_query(resource)
        if request_method == "PUT" and resource.id:
            # create if it does not exist yet
            entry.request = Bundle.Entry.Request(
                method="PUT", url=f"{resource_type}/{resource.id}", ifNoneMatch="*"
            )
        elif request_method == "CONDITIONAL" and query:
            # conditional update on the first identifier
            entry.request = Bundle.Entry.Request(method="PUT", url=f"{resource_type}?{query}")
        elif request_method == "POST" and query:
            entry.request = Bundle.Entry.Request(method="POST", url=resource_type, ifNoneExist=query)
        else:
            entry.request = Bundle.Entry.Request(method="POST", url=resource_type)
        return entry
