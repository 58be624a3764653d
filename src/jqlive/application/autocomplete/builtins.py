"""Static table of jq built-ins, keywords and operators.

The table is built once at import time and exposed only through immutable
containers. Two derived sets drive the classifier:

- ``ELEMENT_CONTEXT_FUNCTIONS``: functions whose argument runs once per array
  element (``map(.`` completes fields of an element, not of the array).
- ``SHAPE_ERASING_FUNCTIONS``: functions whose output field names cannot be
  derived from their input field names.
"""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class JqBuiltin:
    """A completable jq name."""

    name: str
    signature: str
    description: str
    needs_parens: bool = False


def _fn(name: str, signature: str, description: str) -> JqBuiltin:
    return JqBuiltin(name, signature, description, needs_parens=signature.endswith(")"))


FUNCTIONS: tuple[JqBuiltin, ...] = (
    # Iteration and filtering
    _fn("map", "map(f)", "Apply f to each element"),
    _fn("map_values", "map_values(f)", "Apply f to each value"),
    _fn("select", "select(f)", "Keep inputs for which f is true"),
    _fn("recurse", "recurse(f)", "Recursively apply f"),
    _fn("walk", "walk(f)", "Apply f bottom-up to every value"),
    _fn("empty", "empty", "Produce no output"),
    _fn("error", "error(msg)", "Raise an error"),
    _fn("limit", "limit(n; f)", "First n outputs of f"),
    _fn("first", "first", "First element"),
    _fn("last", "last", "Last element"),
    _fn("nth", "nth(n)", "Element at index n"),
    _fn("until", "until(cond; next)", "Apply next until cond holds"),
    _fn("while", "while(cond; update)", "Repeat update while cond holds"),
    _fn("range", "range(n)", "Numbers from 0 to n"),
    _fn("any", "any(f)", "True if f holds for any element"),
    _fn("all", "all(f)", "True if f holds for every element"),
    _fn("isempty", "isempty(f)", "True if f produces no output"),
    _fn("input", "input", "Next input value"),
    _fn("inputs", "inputs", "All remaining inputs"),
    # Objects and arrays
    _fn("keys", "keys", "Sorted object keys or array indices"),
    _fn("keys_unsorted", "keys_unsorted", "Object keys in insertion order"),
    _fn("values", "values", "Non-null values"),
    _fn("has", "has(key)", "True if the key exists"),
    _fn("in", "in(obj)", "True if the input key exists in obj"),
    _fn("inside", "inside(b)", "True if the input is contained in b"),
    _fn("contains", "contains(b)", "True if the input contains b"),
    _fn("length", "length", "Length of a string, array or object"),
    _fn("utf8bytelength", "utf8bytelength", "Byte length of a string"),
    _fn("add", "add", "Sum or concatenate elements"),
    _fn("del", "del(path)", "Delete a path"),
    _fn("to_entries", "to_entries", "Object to [{key, value}]"),
    _fn("from_entries", "from_entries", "[{key, value}] to object"),
    _fn("with_entries", "with_entries(f)", "Map over {key, value} entries"),
    _fn("paths", "paths", "All paths"),
    _fn("leaf_paths", "leaf_paths", "Paths to scalar leaves"),
    _fn("path", "path(f)", "Paths produced by f"),
    _fn("getpath", "getpath(p)", "Value at path p"),
    _fn("setpath", "setpath(p; v)", "Set value at path p"),
    _fn("delpaths", "delpaths(ps)", "Delete several paths"),
    _fn("to_array", "to_array", "Wrap non-arrays in an array"),
    _fn("tostream", "tostream", "Stream of [path, leaf] events"),
    _fn("fromstream", "fromstream(f)", "Rebuild values from stream events"),
    _fn("flatten", "flatten", "Flatten nested arrays"),
    _fn("reverse", "reverse", "Reverse an array or string"),
    _fn("sort", "sort", "Sort an array"),
    _fn("sort_by", "sort_by(f)", "Sort by the value of f"),
    _fn("group_by", "group_by(f)", "Group elements by f"),
    _fn("unique", "unique", "Sorted distinct elements"),
    _fn("unique_by", "unique_by(f)", "Distinct by the value of f"),
    _fn("min", "min", "Smallest element"),
    _fn("max", "max", "Largest element"),
    _fn("min_by", "min_by(f)", "Element with the smallest f"),
    _fn("max_by", "max_by(f)", "Element with the largest f"),
    _fn("index", "index(s)", "First index of s"),
    _fn("rindex", "rindex(s)", "Last index of s"),
    _fn("indices", "indices(s)", "All indices of s"),
    _fn("transpose", "transpose", "Transpose a matrix"),
    _fn("combinations", "combinations", "Cartesian product of arrays"),
    _fn("splits", "splits(re)", "Split a string by a regex"),
    # Types
    _fn("type", "type", "Type name of the input"),
    _fn("arrays", "arrays", "Select arrays"),
    _fn("objects", "objects", "Select objects"),
    _fn("iterables", "iterables", "Select arrays and objects"),
    _fn("booleans", "booleans", "Select booleans"),
    _fn("numbers", "numbers", "Select numbers"),
    _fn("strings", "strings", "Select strings"),
    _fn("nulls", "nulls", "Select nulls"),
    _fn("scalars", "scalars", "Select non-iterables"),
    _fn("tostring", "tostring", "Convert to string"),
    _fn("tonumber", "tonumber", "Convert to number"),
    _fn("tojson", "tojson", "Serialize as JSON text"),
    _fn("fromjson", "fromjson", "Parse JSON text"),
    _fn("not", "not", "Boolean negation"),
    # Strings
    _fn("ascii_downcase", "ascii_downcase", "Lowercase ASCII letters"),
    _fn("ascii_upcase", "ascii_upcase", "Uppercase ASCII letters"),
    _fn("ltrimstr", "ltrimstr(s)", "Remove prefix s"),
    _fn("rtrimstr", "rtrimstr(s)", "Remove suffix s"),
    _fn("trim", "trim", "Strip surrounding whitespace"),
    _fn("startswith", "startswith(s)", "True if the input starts with s"),
    _fn("endswith", "endswith(s)", "True if the input ends with s"),
    _fn("split", "split(s)", "Split a string"),
    _fn("join", "join(s)", "Join array elements with s"),
    _fn("test", "test(re)", "True if the regex matches"),
    _fn("match", "match(re)", "Regex match objects"),
    _fn("capture", "capture(re)", "Named regex captures as an object"),
    _fn("scan", "scan(re)", "All regex matches"),
    _fn("sub", "sub(re; s)", "Replace the first match"),
    _fn("gsub", "gsub(re; s)", "Replace all matches"),
    _fn("ascii", "ascii", "Character for a code point"),
    _fn("explode", "explode", "String to code points"),
    _fn("implode", "implode", "Code points to string"),
    _fn("@base64", "@base64", "Base64 encode"),
    _fn("@base64d", "@base64d", "Base64 decode"),
    _fn("@csv", "@csv", "Format an array as CSV"),
    _fn("@tsv", "@tsv", "Format an array as TSV"),
    _fn("@html", "@html", "HTML-escape"),
    _fn("@uri", "@uri", "Percent-encode"),
    _fn("@sh", "@sh", "Quote for a shell"),
    _fn("@json", "@json", "Serialize as JSON text"),
    _fn("@text", "@text", "Convert to string"),
    # Math
    _fn("floor", "floor", "Round down"),
    _fn("ceil", "ceil", "Round up"),
    _fn("round", "round", "Round to nearest"),
    _fn("sqrt", "sqrt", "Square root"),
    _fn("abs", "abs", "Absolute value"),
    _fn("pow", "pow(x; y)", "x raised to y"),
    _fn("log", "log", "Natural logarithm"),
    _fn("infinite", "infinite", "Positive infinity"),
    _fn("nan", "nan", "Not a number"),
    # Dates
    _fn("now", "now", "Current Unix time"),
    _fn("todate", "todate", "Unix time to ISO 8601"),
    _fn("fromdate", "fromdate", "ISO 8601 to Unix time"),
    _fn("strftime", "strftime(fmt)", "Format broken-down time"),
    _fn("strptime", "strptime(fmt)", "Parse a time string"),
    _fn("mktime", "mktime", "Broken-down time to Unix time"),
    _fn("gmtime", "gmtime", "Unix time to broken-down time"),
    # Misc
    _fn("env", "env", "Environment variables"),
    _fn("builtins", "builtins", "List of built-in functions"),
    _fn("input_filename", "input_filename", "Name of the current input file"),
    _fn("debug", "debug", "Print the input to stderr"),
    _fn("halt", "halt", "Stop the program"),
    _fn("halt_error", "halt_error", "Stop with an error"),
)

# Keywords that start an expression (offered where a function name may appear)
PREFIX_KEYWORDS: tuple[JqBuiltin, ...] = (
    JqBuiltin("if", "if c then a else b end", "Conditional"),
    JqBuiltin("try", "try f catch g", "Catch errors raised by f"),
    JqBuiltin("reduce", "reduce f as $x (init; update)", "Fold over outputs of f"),
    JqBuiltin("foreach", "foreach f as $x (init; update)", "Fold emitting each state"),
    JqBuiltin("def", "def name: body;", "Define a function"),
    JqBuiltin("label", "label $name | f", "Target for break"),
    JqBuiltin("import", 'import "path" as name;', "Import a module"),
    JqBuiltin("include", 'include "path";', "Include a module"),
)

# Operators and keywords that follow a complete term
INFIX_OPERATORS: tuple[JqBuiltin, ...] = (
    JqBuiltin("and", "a and b", "Logical and"),
    JqBuiltin("or", "a or b", "Logical or"),
    JqBuiltin("as", "f as $x | g", "Bind a variable"),
    JqBuiltin("then", "if c then a", "Conditional branch"),
    JqBuiltin("elif", "elif c then a", "Additional condition"),
    JqBuiltin("else", "else b end", "Fallback branch"),
    JqBuiltin("end", "end", "Close a block"),
    JqBuiltin("catch", "try f catch g", "Error handler"),
    JqBuiltin("|", "a | b", "Pipe"),
    JqBuiltin("|=", "path |= f", "Update assignment"),
    JqBuiltin("//", "a // b", "Alternative"),
    JqBuiltin("//=", "path //= v", "Alternative assignment"),
    JqBuiltin("==", "a == b", "Equal"),
    JqBuiltin("!=", "a != b", "Not equal"),
    JqBuiltin("<=", "a <= b", "Less or equal"),
    JqBuiltin(">=", "a >= b", "Greater or equal"),
    JqBuiltin("+=", "path += v", "Add assignment"),
    JqBuiltin("-=", "path -= v", "Subtract assignment"),
    JqBuiltin("*=", "path *= v", "Multiply assignment"),
    JqBuiltin("/=", "path /= v", "Divide assignment"),
)

ELEMENT_CONTEXT_FUNCTIONS = frozenset(
    {
        "map",
        "select",
        "sort_by",
        "group_by",
        "unique_by",
        "min_by",
        "max_by",
        "any",
        "all",
        "map_values",
        "with_entries",
    }
)

SHAPE_ERASING_FUNCTIONS = frozenset(
    {
        "keys",
        "keys_unsorted",
        "to_entries",
        "from_entries",
        "group_by",
        "flatten",
        "paths",
        "leaf_paths",
        "path",
        "getpath",
        "tostream",
        "fromstream",
        "fromjson",
        "transpose",
        "combinations",
        "splits",
        "split",
        "scan",
        "match",
        "capture",
        "input",
        "inputs",
        "env",
        "reduce",
        "foreach",
    }
)

# Words after which the next token starts a new expression
EXPRESSION_KEYWORDS = frozenset(
    {"and", "or", "not", "if", "then", "elif", "else", "try", "catch", "reduce", "foreach", "label", "def"}
)

BUILTINS_BY_NAME = MappingProxyType({builtin.name: builtin for builtin in FUNCTIONS})


def is_element_context(name: str | None) -> bool:
    return name in ELEMENT_CONTEXT_FUNCTIONS


def filter_functions(partial: str) -> list[JqBuiltin]:
    """Functions and prefix keywords whose name starts with ``partial``."""
    if not partial:
        return []
    candidates = FUNCTIONS + PREFIX_KEYWORDS
    return [builtin for builtin in candidates if builtin.name.startswith(partial)]


def filter_operators(partial: str) -> list[JqBuiltin]:
    """Infix operators and keywords whose text starts with ``partial``."""
    if not partial:
        return []
    return [builtin for builtin in INFIX_OPERATORS if builtin.name.startswith(partial)]
