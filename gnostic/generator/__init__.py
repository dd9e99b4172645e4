"""Type models built from JSON Schemas and the Protocol Buffer descriptions made from them."""