"""Transfer instruction parsing and validation.

The intent layer converts a Spanish/English natural-language instruction into a `ParseResult`,
optionally reconciled with a remote AI parse, from which a `TransferIntent` can be built.
"""
