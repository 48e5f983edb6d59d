"""Vulture whitelist for false positives.

This file contains code that vulture incorrectly flags as unused
but is actually used by frameworks (Pydantic) or by host applications
that static analysis cannot detect.
"""
# pylint: disable=all
# Pydantic field validators - used by framework via @field_validator decorator
_.clamp_delay  # noqa: F821  # unused method (grossdict/core/config.py:39)
_.parse_string_list  # noqa: F821  # unused method (grossdict/core/config.py:51)
_.expand_path  # noqa: F821  # unused method (grossdict/core/config.py:82)
_.non_negative_index  # noqa: F821  # unused method (grossdict/core/config.py:168)

# Pydantic model validator - used by framework via @model_validator decorator
_.validate_cross_fields  # noqa: F821  # unused method (grossdict/core/config.py:87)

# Pydantic model_config class variable - read by framework at class definition time
# Enables validate_assignment so clamped preferences stay clamped
model_config  # noqa: F821  # unused variable (grossdict/core/config.py:24)

# Host-facing API called by editor integrations, not by the CLI
AsyncioScheduler  # unused class (grossdict/editor/scheduling.py)
add_advance_listener  # unused method (grossdict/automation/session.py)
clipboard_paste  # unused method (grossdict/automation/session.py)
load_draft  # unused method (grossdict/automation/session.py)
new_case  # unused method (grossdict/automation/session.py)
new_specimen  # unused method (grossdict/automation/session.py)
restore_to  # unused method (grossdict/automation/session.py)
