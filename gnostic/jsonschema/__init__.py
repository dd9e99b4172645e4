"""Reading, operating on, displaying and writing JSON Schemas."""