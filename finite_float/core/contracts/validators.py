"""
JSON Contract Validators

Module for JSON interop of finite floats:
- Draft 2020-12 JSON Schema validation where "number" excludes NaN/±Infinity
  (Python's json module accepts NaN/Infinity tokens, jsonschema by default
  accepts them as numbers)
- Strict JSON load: every JSON float becomes a FiniteFloat
- Strict JSON dump: FiniteFloat serializes as a JSON number

Schemas (schema/):
- finite_float.json: a single finite number
- finite_float_series.json: {"name": str, "values": [finite numbers]}
"""

import json
import math
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.validators import extend

from finite_float.core.domain.finite import FiniteFloat
from finite_float.core.math.numerical_safeguards import ensure_finite


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loader for packaged JSON Schema files.

    Schemas live in schema/ next to this module.
    """

    def __init__(self):
        self._schema_dir = Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Cache of loaded schemas
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'finite_float')

        Returns:
            Loaded schema as dict

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid Draft 2020-12 schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# FINITE NUMBER TYPE CHECKER
# =============================================================================


def _is_finite_number(checker, instance: Any) -> bool:
    if not Draft202012Validator.TYPE_CHECKER.is_type(instance, "number"):
        return False
    # Python ints are always finite
    return isinstance(instance, int) or math.isfinite(instance)


FiniteNumberValidator = extend(
    Draft202012Validator,
    type_checker=Draft202012Validator.TYPE_CHECKER.redefine("number", _is_finite_number),
)


def to_plain(data: Any) -> Any:
    """
    Convert a document holding FiniteFloat values into plain JSON data.

    FiniteFloat → float, tuple → list; dicts and lists are converted
    recursively; everything else is returned unchanged.
    """
    if isinstance(data, FiniteFloat):
        return data.value
    if isinstance(data, dict):
        return {key: to_plain(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_plain(item) for item in data]
    return data


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Validates documents against a packaged schema with finite-number semantics.

    FiniteFloat values inside documents are accepted as numbers.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = FiniteNumberValidator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: If data does not match the schema
        """
        self.validator.validate(to_plain(data))

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(to_plain(data))

    def iter_errors(self, data: Any):
        return self.validator.iter_errors(to_plain(data))


class FiniteFloatValidator(ContractValidator):
    """Validator for a single finite number."""

    def __init__(self):
        super().__init__("finite_float")


class FiniteFloatSeriesValidator(ContractValidator):
    """Validator for a named series of finite numbers."""

    def __init__(self):
        super().__init__("finite_float_series")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_finite_document(data: Any, schema: Dict[str, Any] | None = None) -> None:
    """
    Validate data against a schema, rejecting NaN/±Infinity numbers.

    Args:
        data: Document (may contain FiniteFloat values)
        schema: JSON Schema dict (default: packaged finite_float.json)

    Raises:
        ValidationError: If data does not match the schema
        jsonschema.SchemaError: If schema itself is invalid
    """
    if schema is None:
        FiniteFloatValidator().validate(data)
        return

    FiniteNumberValidator.check_schema(schema)
    FiniteNumberValidator(schema).validate(to_plain(data))


def validate_finite_float_series(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: If data is not a valid finite_float_series document
    """
    FiniteFloatSeriesValidator().validate(data)


def _reject_constant(name: str) -> float:
    # json passes "NaN", "Infinity" or "-Infinity"
    return ensure_finite(float(name), "parse")


def load_finite_json(text: str | bytes) -> Any:
    """
    Parse JSON, turning every JSON float into a FiniteFloat.

    Integers stay int. NaN/Infinity tokens and float literals that overflow
    ("1e999") raise NotFiniteError; malformed JSON raises json.JSONDecodeError.
    """
    return json.loads(text, parse_float=FiniteFloat.from_str, parse_constant=_reject_constant)


def _encode_default(obj: Any) -> Any:
    if isinstance(obj, FiniteFloat):
        return obj.value
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dump_finite_json(data: Any, **kwargs: Any) -> str:
    """
    Serialize data to JSON; FiniteFloat values become JSON numbers.

    Native NaN/±Infinity floats raise ValueError (allow_nan=False).
    Extra keyword arguments are passed to json.dumps.
    """
    return json.dumps(data, default=_encode_default, allow_nan=False, **kwargs)
