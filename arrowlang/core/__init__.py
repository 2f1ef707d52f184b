"""The arrowlang language core: lexical primitives, grammar, syntax tree, values, scopes and evaluator. Nothing
in here does any I/O."""
