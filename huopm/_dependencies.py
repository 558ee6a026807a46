import types


def import_optional_dependency(name: str, extra: str = "") -> types.ModuleType:
    """
    Import an optional dependency.

    If the dependency is missing an ImportError with a nice message is
    raised.

    Parameters
    ----------
    name : str
        The module name.
    extra : str
        Additional text to include in the ImportError message.

    Returns
    -------
    module
    """

    import importlib.util

    package_name = name.split(".")[0]

    spec = importlib.util.find_spec(package_name)
    if spec is None:
        msg = f"Missing optional dependency '{package_name}'. Use pip or conda to install {package_name}."
        if extra:
            msg += f" {extra}"
        raise ImportError(msg)

    return importlib.import_module(name)
