"""
Tests to detect circular import issues.

These tests iterate over all submodules to catch hidden import cycles
that might not be apparent when importing only specific symbols.
"""
import importlib
import pkgutil


class TestAuthImportCycles:
    """Test that all auth submodules can be imported independently."""

    def test_all_auth_submodules_importable(self):
        """Iterate over all auth submodules to catch hidden cycles."""
        import tracker.auth as auth_pkg

        imported = []
        errors = []

        for importer, modname, ispkg in pkgutil.iter_modules(auth_pkg.__path__):
            try:
                mod = importlib.import_module(f"tracker.auth.{modname}")
                imported.append(modname)
                assert mod is not None
            except Exception as e:
                errors.append(f"{modname}: {e}")

        assert not errors, "Failed to import auth submodules:\n" + "\n".join(errors)
        assert len(imported) >= 8, f"Expected at least 8 auth submodules, got {len(imported)}"

    def test_auth_types_no_dependencies(self):
        """types.py should have no auth submodule dependencies."""
        from tracker.auth.types import Claims, Identity

        assert Claims is not None
        assert Identity is not None

    def test_auth_facade_imports_all(self):
        """Facade should successfully import all submodules."""
        import tracker.auth

        assert hasattr(tracker.auth, 'jwt_required')  # decorators
        assert hasattr(tracker.auth, 'TokenService')  # tokens
        assert hasattr(tracker.auth, 'AuthenticationService')  # identity
        assert hasattr(tracker.auth, 'PasswordHasher')  # passwords
        assert hasattr(tracker.auth, 'run_guards')  # guards


class TestPackageImportCycles:
    def test_all_route_modules_importable(self):
        import tracker.routes as routes_pkg

        for importer, modname, ispkg in pkgutil.iter_modules(routes_pkg.__path__):
            assert importlib.import_module(f"tracker.routes.{modname}") is not None

    def test_core_importable_without_tracker(self):
        import core

        assert hasattr(core, 'Database')
        assert hasattr(core, 'StoreUnavailable')
