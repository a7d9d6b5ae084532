"""
Parsing modules for CommentLens.

Turns raw file content into extracted comments:
- Tokenizer: splits one CSV line into fields
- Field Matcher: locates the comment field in a header or record
- Parsers: JSON-array and CSV-table comment parsers
"""
