"""
Smoke tests for the commission form packages.
These tests verify basic imports and environment setup.
"""


def test_pyside6_imports():
    """Test that PySide6 can be imported successfully."""
    import PySide6  # noqa: F401
    from PySide6.QtWidgets import QApplication  # noqa: F401


def test_package_imports():
    """Test that the public modules import together."""
    from commission import config, config_manager, contract, error_handler, errors, rules, validation  # noqa: F401
    from commission_gui.validation import InputValidator, QuantityValidator  # noqa: F401


def test_validator_works_with_line_edit():
    """A registered line edit is validated against the shared rules."""
    from PySide6.QtWidgets import QLineEdit

    from commission_gui.validation import InputValidator

    edits = [QLineEdit("Somchai"), QLineEdit("10"), QLineEdit("20"), QLineEdit("30")]
    validator = InputValidator()
    validator.register_commission_form(*edits)

    assert validator.validate_all() is True
    assert validator.form_result().is_valid
    validator.cleanup()
