def test_import_cozyshop_package() -> None:
    import importlib

    module = importlib.import_module("cozyshop")
    assert module.__version__


def test_import_rng_no_side_effects() -> None:
    from cozyshop.core.rng import RNG

    rng = RNG(42)
    value = rng.randint(0, 1)
    assert value in (0, 1)


def test_import_cli_entry_point() -> None:
    from cozyshop.main import main

    assert callable(main)
