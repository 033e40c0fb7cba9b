"""Framework-agnostic building blocks shared by tenancy modules."""
