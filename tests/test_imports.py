def test_import_skirmish_package() -> None:
    import importlib

    module = importlib.import_module("skirmish")
    assert module is not None
    assert module.__version__


def test_import_controller_no_side_effects() -> None:
    from skirmish.services import BattleController

    assert BattleController.__name__ == "BattleController"
