"""stackpolicy core: serializer, scope tree, errors, modes, canonical JSON."""
