"""Business operations for the Pillar API.

Managers accept a ``RequestContext`` and raise domain exceptions
(``LookupError``, ``RuntimeError``, ...), never HTTP exceptions -- that
translation is the router's responsibility.
"""
