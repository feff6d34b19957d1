"""Services: pure transformations over loaded deployment sets.

Why a separate layer:
- Normalization, reconciliation and coverage never touch the filesystem.
- The orchestration (`inspection`) is the only module that wires adapters in.
"""
