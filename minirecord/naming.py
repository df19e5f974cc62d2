"""
Name inflection used to infer table names, foreign keys and class names.

Only the handful of English rules needed for model and association names.
"""
import re

IRREGULAR = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "mouse": "mice",
    "goose": "geese",
    "foot": "feet",
    "tooth": "teeth",
    "ox": "oxen",
}
IRREGULAR_SINGULAR = {plural: singular for singular, plural in IRREGULAR.items()}
UNCOUNTABLE = {"sheep", "fish", "series", "species", "equipment", "information", "data"}

_camel_boundary = re.compile(r"([A-Z]+)([A-Z][a-z])")
_lower_upper = re.compile(r"([a-z\d])([A-Z])")


def underscore(name):
    name = _camel_boundary.sub(r"\1_\2", name)
    name = _lower_upper.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def camelize(name):
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def _split_last(word):
    head, sep, last = word.rpartition("_")
    return head + sep, last


def pluralize(word):
    head, last = _split_last(word)
    lower = last.lower()
    if not lower or lower in UNCOUNTABLE:
        return word
    if lower in IRREGULAR:
        return head + IRREGULAR[lower]
    if re.search(r"[^aeiou]y$", lower):
        return head + last[:-1] + "ies"
    if re.search(r"(s|x|z|ch|sh)$", lower):
        return head + last + "es"
    return head + last + "s"


def singularize(word):
    head, last = _split_last(word)
    lower = last.lower()
    if not lower or lower in UNCOUNTABLE:
        return word
    if lower in IRREGULAR_SINGULAR:
        return head + IRREGULAR_SINGULAR[lower]
    if lower.endswith("ies") and len(lower) > 3:
        return head + last[:-3] + "y"
    if re.search(r"(ss|x|z|ch|sh)es$", lower):
        return head + last[:-2]
    if lower.endswith("s") and not lower.endswith("ss"):
        return head + last[:-1]
    return word


def tableize(class_name):
    """``"HouseCat"`` -> ``"house_cats"``"""
    return pluralize(underscore(class_name))


def classify(name):
    """``"owners"`` or ``"owner"`` -> ``"Owner"``"""
    return camelize(singularize(underscore(name)))
