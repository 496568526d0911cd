"""
toolmatrix
~~~~~~~~~~

Cutting-tool pool tracking and allocation.

Subpackages
-----------
catalog      Tool types and their lifetime budgets.
pool         Tool instances, lifecycle states and the instance pool.
allocation   Reuse → fresh → fabricate allocation engine.
reporting    Inventory, utilisation, maintenance and shortage views.
"""
