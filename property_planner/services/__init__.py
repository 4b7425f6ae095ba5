"""
Services Package

External collaborators behind narrow interfaces:
- storage: async key/value blob stores
- persistence: scenario snapshot persistence on top of a blob store
"""
