from typing import Dict, List, Union

# Dynamically typed values shared by the context, the response table and
# parsed response bodies. Mirrors the YAML/JSON value model.
Value = Union[str, int, float, bool, None, List["Value"], Dict[str, "Value"]]

Context = Dict[str, Value]
ResponseTable = Dict[str, Value]
