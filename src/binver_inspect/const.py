ERRORS = {
  "E_HEADER_SHORT": "File shorter than the version header",
  "E_END_OF_INPUT": "Document ended before the schema was satisfied",
  "E_UNKNOWN_VARIANT": "Tagged-union selector not known at this document version",
  "E_INVALID_UTF8": "Text field is not valid UTF-8",
  "E_TRAILING_BYTES": "Unconsumed bytes after the root value",
  "E_SCHEMA_IMPORT": "Schema could not be imported",
  "E_SCHEMA_INVALID": "Schema cannot build a value for this document",
  "E_DEPTH": "Document nests deeper than the decoder allows",
  "E_READ": "Document could not be decoded",
}
