"""
Loading of configuration values, from the packaged YAML file optionally merged
with overrides. Scripts run with hydra receive the same structure as cfg.
"""
import os

from omegaconf import OmegaConf


CONFIG_DIR = os.path.join(os.path.dirname(__file__), "configs")

def load_config(overrides=None):
    """
    Load default config and merge overrides, provided either as a dotlist (e.g.
    ["inference.tolerance=1e-9"]) or as a (nested) dict
    """
    cfg = OmegaConf.load(os.path.join(CONFIG_DIR, "config.yaml"))

    if overrides is not None:
        if isinstance(overrides, (list, tuple)):
            overrides = OmegaConf.from_dotlist(list(overrides))
        else:
            overrides = OmegaConf.create(overrides)
        cfg = OmegaConf.merge(cfg, overrides)

    return cfg
