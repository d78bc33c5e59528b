from rolegate.domain.shared.model.entity import Entity


class Aggregate(Entity):
    """Consistency boundary loaded and saved as a unit by a repository."""
