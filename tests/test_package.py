"""Basic tests for blossom_store package."""


def test_import_blossom_store():
    """Test that blossom_store can be imported."""
    import blossom_store

    assert blossom_store.__version__ == "1.0.0"


def test_public_api():
    """Test the storage entry points are exported at top level."""
    import blossom_store

    for name in ("S3BlobStorage", "S3Settings", "BlobInfo", "Redirect", "BlobStream", "detect_content_type"):
        assert name in blossom_store.__all__
        assert hasattr(blossom_store, name)
