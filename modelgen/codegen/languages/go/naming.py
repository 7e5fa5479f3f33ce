"""
Go keywords and package-clause checks.

The keyword set is what the renderer escapes when a receiver or parameter
name derived from a table or column would not compile.
"""

from typing import List

# https://go.dev/ref/spec#Keywords
GO_RESERVED_WORDS = frozenset(
    """
    break case chan const continue default defer else fallthrough for func
    go goto if import interface map package range return select struct
    switch type var
    """.split()
)

# Names the built-in object API declares or imports: the gorm package, its
# db handle and the err result. Receivers and parameters must not reuse them.
GO_TEMPLATE_LOCALS = frozenset({"db", "err", "gorm"})


def validate_go_package_name(name: str) -> List[str]:
    """
    Check a package clause against Go conventions.

    Generated files still compile with a conventional-but-odd name such as
    ``userModels``, so problems are returned as warnings for the CLI to
    show rather than raised.

    Returns:
        List of validation warnings (empty if valid)
    """
    if not name:
        return ["Package name cannot be empty"]

    warnings = []
    if not name.isidentifier() or not name.isascii():
        warnings.append(f"'{name}' is not a valid Go identifier")
    elif name in GO_RESERVED_WORDS:
        warnings.append(f"'{name}' is a Go reserved word")

    if name != name.lower():
        warnings.append("Package names should be lowercase")
    if "_" in name:
        warnings.append("Package names should not contain underscores")

    return warnings
