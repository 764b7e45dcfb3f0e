"""Infrastructure adapters: password encoding and persistence."""
