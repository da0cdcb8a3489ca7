"""Tests for the mediafit package."""


def test_package_imports():
    """Test that the package can be imported successfully."""
    import mediafit

    assert mediafit is not None


def test_package_version():
    """Test that the package has a version string."""
    from mediafit import __version__

    assert __version__ == "0.3.0"
