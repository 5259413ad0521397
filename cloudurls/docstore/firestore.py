"""
Firestore docstore normalization.

Canonical form:
    firestore://projects/<project>/databases/<database>/documents/<collection>?name_field=<key>

Accepted source forms without a collection option:
    firestore://<project>/<database>/<collection>
    firestore://projects/<project>/databases/<database>/documents/<collection>

Accepted source forms with a collection option:
    firestore://<project>
    firestore://<project>/<database>
    firestore://projects/<project>/databases/<database>
    firestore://projects/<project>/databases/<database>/documents
"""

from dataclasses import replace

from ..core.backends import BackendKind
from ..core.errors import MissingFieldError, StructuralMismatchError
from ..core.locator import Locator, join_path
from .base import DOCSTORE_REGISTRY, NormalizationOptions, resolve_field

PROJECTS = "projects"
DEFAULT_DATABASE = "(default)"
_ESCAPED_DEFAULT_DATABASE = "%28default%29"


@DOCSTORE_REGISTRY.register_decorator(BackendKind.DOCUMENT_DB_HIERARCHICAL)
def normalize_firestore(locator: Locator, options: NormalizationOptions, src_url: str) -> str:
    folded = _fold_project(locator, src_url)
    if options.collection:
        path = _path_with_outer_collection(folded, options.collection, src_url)
    else:
        path = _path_with_inner_collection(folded, src_url)

    name_field = resolve_field(folded, "name_field", options.key_name)
    rewritten = replace(folded, path=path).with_query(name_field=name_field)
    return rewritten.to_url().replace(_ESCAPED_DEFAULT_DATABASE, DEFAULT_DATABASE)


def _fold_project(locator: Locator, src_url: str) -> Locator:
    """Rewrite firestore://<project>/... as firestore://projects/<project>/..."""
    if not locator.authority:
        raise MissingFieldError("Firestore URL doesn't have project information", src_url)
    if locator.authority == PROJECTS:
        return locator
    return replace(locator, authority=PROJECTS, path=join_path(locator.authority, locator.path))


def _path_with_inner_collection(locator: Locator, src_url: str) -> str:
    elements = locator.segments
    if len(elements) == 4:
        project, database, collection = elements[1], elements[2], elements[3]
    elif len(elements) == 6:
        project, database, collection = elements[1], elements[3], elements[5]
    else:
        raise StructuralMismatchError(
            "Firestore URL should be firestore://(project)/(database)/(collection) or "
            "firestore://projects/(project)/databases/(database)/documents/(collection)",
            src_url,
        )
    return join_path(project, "databases", database, "documents", collection)


def _path_with_outer_collection(locator: Locator, collection: str, src_url: str) -> str:
    elements = locator.segments
    if len(elements) == 2:
        project, database = elements[1], DEFAULT_DATABASE
    elif len(elements) == 3:
        project, database = elements[1], elements[2]
    elif len(elements) in (4, 5):
        # A trailing collection segment in the source is dropped in favour of the option
        project, database = elements[1], elements[3]
    else:
        raise StructuralMismatchError(
            "Firestore URL should be firestore://(project) or firestore://(project)/(database) or "
            "firestore://projects/(project)/databases/(database)/documents",
            src_url,
        )
    return join_path(project, "databases", database, "documents", collection)
