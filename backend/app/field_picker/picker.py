# app/field_picker/picker.py
import logging
from typing import Callable, List, Optional

from app.field_picker.aggregate import collect_all, is_select_all_disabled
from app.field_picker.annotate import annotate_disabled, narrow_to_field
from app.field_picker.directory import SchemaDirectory
from app.field_picker.search import SearchPredicate
from app.field_picker.tree import FieldTree, FieldTreeBuilder, find_node
from app.field_picker.version import extra_fields_for
from app.field_picker.visibility import should_show_search
from app.schemas.field import FieldNode
from app.schemas.picker import AddEvent, PickerOptions

logger = logging.getLogger("uvicorn")

AddListener = Callable[[AddEvent], None]


class FieldPicker:
    """
    Field picker for one root collection.
    Rebuilds the tree for every query and emits ``AddEvent``s to listeners.
    """

    def __init__(self, directory: SchemaDirectory, collection: str, options: Optional[PickerOptions] = None):
        self.directory = directory
        self.collection = collection
        self.options = options or PickerOptions()
        self.builder = FieldTreeBuilder(directory)
        self.query = ""
        self._listeners: List[AddListener] = []
        self._tree: FieldTree = self._build_tree()

    # ---------- Events ----------
    def on_add(self, listener: AddListener) -> AddListener:
        self._listeners.append(listener)
        return listener

    def _emit(self, keys: List[str]) -> AddEvent:
        event = AddEvent(field_keys=keys)
        for listener in self._listeners:
            listener(event)
        return event

    # ---------- Tree ----------
    @property
    def field_tree(self) -> FieldTree:
        return self._tree

    def _build_tree(self) -> FieldTree:
        predicate = SearchPredicate(
            self.directory,
            self.collection,
            self.query,
            include_relations=not self.options.restrict_to_root_collection_fields,
        )
        return self.builder.build_tree(
            self.collection, extra_fields_for(self.directory, self.collection), predicate
        )

    def search(self, query: str = "") -> List[FieldNode]:
        """Rebuild the tree for ``query`` and return the visible top-level nodes."""
        self.query = query or ""
        self._tree = self._build_tree()
        logger.debug(f"Rebuilt field tree for {self.collection} (search='{self.query}', "
                     f"{len(self._tree.tree_list)} top-level nodes)")
        return self.tree

    @property
    def tree(self) -> List[FieldNode]:
        """Annotated, narrowed top-level nodes of the current tree."""
        annotated = annotate_disabled(self.field_tree.tree_list, self.options.explicitly_disabled_keys)
        return narrow_to_field(annotated, self.options.single_field_filter)

    def expand(self, key: str) -> Optional[List[FieldNode]]:
        """Load a relation branch; returns its annotated children."""
        children = self.field_tree.load_relation_branch(key)
        if children is None:
            return None
        return annotate_disabled(children, self.options.explicitly_disabled_keys)

    # ---------- Visibility ----------
    @property
    def show_search(self) -> bool:
        fields = self.directory.get_fields_for_collection(self.collection)
        relations_exist = len(self.directory.get_relations_for_collection(self.collection)) > 0
        return should_show_search(fields, relations_exist)

    @property
    def select_all_disabled(self) -> bool:
        return is_select_all_disabled(self.tree)

    # ---------- Selection ----------
    def reveal(self, key: str) -> None:
        """Load every relation branch on the path to a dotted key."""
        parts = key.split(".")
        for i in range(1, len(parts)):
            self.field_tree.load_relation_branch(".".join(parts[:i]))

    def add(self, key: str) -> Optional[AddEvent]:
        self.reveal(key)
        node = find_node(self.tree, key)
        if node is None or node.disabled:
            logger.debug(f"Ignoring add of '{key}' on {self.collection}: not selectable")
            return None
        return self._emit([node.key])

    def add_all(self) -> Optional[AddEvent]:
        tree = self.tree
        if not self.options.allow_bulk_select or is_select_all_disabled(tree):
            logger.debug(f"Ignoring add-all on {self.collection}: bulk select unavailable")
            return None
        return self._emit(collect_all(tree))
