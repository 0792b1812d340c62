"""
Manifest Parser

Turns multi-document manifest text into an ordered sequence of resource
descriptors.
"""

import logging
from typing import List, Dict, Any

try:
    import yaml
except ImportError:
    raise ImportError("PyYAML is required. Install with: pip install PyYAML")

from ..core.constants import KubernetesConstants
from ..core.exceptions import ParseError
from .models import ResourceDescriptor

logger = logging.getLogger(__name__)


class ManifestParser:
    """Parses YAML manifests into ResourceDescriptor records"""

    def parse(self, manifest: str, default_namespace: str) -> List[ResourceDescriptor]:
        """
        Parse every document of a manifest, in order

        Empty and marker-only documents are skipped. A document of kind List
        contributes its items in order.

        Args:
            manifest: Raw manifest text with `---` document markers
            default_namespace: Namespace for documents without metadata.namespace

        Returns:
            List of ResourceDescriptor in document order

        Raises:
            ParseError: If a document is malformed or lacks apiVersion/kind
        """
        descriptors = []
        if not manifest or not manifest.strip():
            return descriptors

        documents = yaml.safe_load_all(manifest)
        document_index = 0
        while True:
            try:
                document = next(documents)
            except StopIteration:
                break
            except yaml.YAMLError as e:
                raise ParseError(f"malformed YAML: {e}", document_index) from e

            if document is not None:
                descriptors.extend(
                    self._descriptors_from_document(document, default_namespace, document_index)
                )
            document_index += 1

        logger.debug(f"Parsed {len(descriptors)} resources from {document_index} manifest documents")
        return descriptors

    def _descriptors_from_document(self, document: Any, default_namespace: str,
                                   document_index: int) -> List[ResourceDescriptor]:
        """
        Extract descriptors from one parsed document, flattening List wrappers

        Args:
            document: Parsed YAML document
            default_namespace: Namespace applied when metadata.namespace is absent
            document_index: Index of the document for error reporting

        Returns:
            List of ResourceDescriptor
        """
        if not isinstance(document, dict):
            raise ParseError(
                f"expected a mapping, got {type(document).__name__}", document_index
            )

        descriptor = self._build_descriptor(document, default_namespace, document_index)
        if descriptor.kind != KubernetesConstants.LIST_KIND:
            return [descriptor]

        items = document.get('items') or []
        if not isinstance(items, list):
            raise ParseError("List items must be a sequence", document_index)

        descriptors = []
        for item in items:
            descriptors.extend(self._descriptors_from_document(item, default_namespace, document_index))
        return descriptors

    @staticmethod
    def _build_descriptor(document: Dict[str, Any], default_namespace: str,
                          document_index: int) -> ResourceDescriptor:
        """Build a descriptor from a mapping that must carry apiVersion and kind"""
        api_version = document.get('apiVersion')
        kind = document.get('kind')
        for field, value in (('apiVersion', api_version), ('kind', kind)):
            if not value or not isinstance(value, str):
                raise ParseError(f"missing or invalid '{field}'", document_index)

        metadata = document.get('metadata') or {}
        if not isinstance(metadata, dict):
            raise ParseError("'metadata' must be a mapping", document_index)

        # An explicit namespace always wins over the caller's default
        namespace = metadata.get('namespace') or default_namespace
        name = metadata.get('name')

        return ResourceDescriptor(
            api_version=api_version,
            kind=kind,
            namespace=str(namespace),
            name=str(name) if name is not None else None
        )


def parse_manifest(manifest: str, default_namespace: str) -> List[ResourceDescriptor]:
    """Parse a manifest with the default parser"""
    return ManifestParser().parse(manifest, default_namespace)
