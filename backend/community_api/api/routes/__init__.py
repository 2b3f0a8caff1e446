"""Route Modules: one file per resource.

Invariants:
    - Each module defines its own APIRouter with a resource prefix and tags
    - Routes only wire the pipeline (validate, gates, handler, respond);
      business logic lives in services/
"""
