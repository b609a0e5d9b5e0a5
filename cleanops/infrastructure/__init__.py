"""Infrastructure adapters: databases, document store and websocket push."""
