"""Typed configuration values for the CA services.

Quick example:

```python
from pathlib import Path

from caconf.core.config import PAConfig, load_config

pa = load_config(Path("config/pa.yaml"), PAConfig, section="pa")
pa.check_challenges()
dsn = pa.db_url()  # reads dbConnectFile now, not at load time
```
"""
