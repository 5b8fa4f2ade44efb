"""Shared package for the property survey application.

Holds the parts of the app that do not depend on Toga:

- Enums (enums.py) - property types and the choice lists shown on the form
- Record schema (schemas.py) - the PropertyRecord pydantic model and its payload
- Visibility rules (visibility.py) - which fields each property type shows
- Validation (validation.py) - required-field and coordinate checks
"""
