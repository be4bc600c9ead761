"""Planning engine — registry, resolver, plan builder, skip filter, executor."""
