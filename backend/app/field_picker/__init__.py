from .directory import SchemaDirectory
from .search import SearchPredicate
from .tree import FieldTree, FieldTreeBuilder
from .picker import FieldPicker
