import pytest

from tests.infrastructure.engine_utils import is_tree_sitter_available


@pytest.fixture
def skip_if_no_tree_sitter():
    """Skip test if the Java grammar for Tree-sitter is not available."""
    if not is_tree_sitter_available():
        pytest.skip("tree-sitter-java not available")
