import json

import numpy as np


def save_result(path, vars, loss=None, meta=None):
    """
    Saves a single .npz containing:
      - vars  (1-d float64 array)
      - loss  (scalar, only if given)
      - meta  (dict, stored as a JSON string)
    """
    if meta is None:
        meta = {}

    arrays = {
        "format_version": np.array(1),
        "vars": np.asarray(vars, dtype=np.float64),
        "meta": np.array(json.dumps(meta)),
    }
    if loss is not None:
        arrays["loss"] = np.array(float(loss), dtype=np.float64)

    np.savez(path, **arrays)


def load_result(path) -> dict:
    with np.load(path, allow_pickle=False) as z:
        loss = float(z["loss"]) if "loss" in z.files else None
        return {
            "vars": z["vars"].copy(),
            "loss": loss,
            "meta": json.loads(str(z["meta"])),
        }
