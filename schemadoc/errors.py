# schemadoc/errors.py: generation failures (all fatal for the current run)


class SchemaDocError(Exception):
    code = "SCHEMADOC_ERROR"

    def __init__(self, message, ref_id=None, path=None, hint=None, code=None):
        super().__init__(message)
        self.ref_id = ref_id
        self.path = tuple(path or ())
        self.hint = hint
        self.code = code or self.code

    def to_dict(self) -> dict:
        return {
            "error": str(self),
            "code": self.code,
            "ref_id": self.ref_id,
            "path": "/".join(str(p) for p in self.path) or None,
            "hint": self.hint,
        }


class DuplicateRefId(SchemaDocError):
    code = "DUPLICATE_REF_ID"


class UnresolvableReference(SchemaDocError):
    code = "UNRESOLVABLE_REFERENCE"


class InvalidComposition(SchemaDocError):
    code = "INVALID_COMPOSITION"


class UnsupportedNodeShape(SchemaDocError):
    code = "UNSUPPORTED_NODE_SHAPE"
