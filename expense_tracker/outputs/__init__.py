from importlib import import_module

from expense_tracker.exceptions import ConfigError
from expense_tracker.outputs.base import BaseOutput


def get_output(name, config):
    """
    Build the writer registered as ``name`` in ``config['output_modules']``,
    a mapping of names to dotted ``module.ClassName`` paths.
    """
    modules = config.get('output_modules') or {}
    if name not in modules:
        raise ConfigError(
            f"No output module configured for '{name}'. "
            f"Known outputs: {', '.join(sorted(modules)) or 'none'}."
        )
    path = modules[name]
    module_name, _, cls_name = str(path).rpartition('.')
    try:
        mod = import_module(module_name)
        cls = getattr(mod, cls_name)
    except (ImportError, AttributeError, ValueError) as e:
        raise ConfigError(f"Cannot load output '{name}' from '{path}': {e}") from e
    if not (isinstance(cls, type) and issubclass(cls, BaseOutput)):
        raise ConfigError(f"Output '{name}' at '{path}' is not an output class.")
    return cls(config)
