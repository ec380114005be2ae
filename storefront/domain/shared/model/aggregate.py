from storefront.domain.shared.model.entity import Entity


class Aggregate(Entity):
    """Consistency boundary; repositories load and save whole aggregates."""
