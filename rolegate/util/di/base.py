from dishka import Provider as DishkaProvider


class Provider(DishkaProvider):
    """Base for all RoleGate DI providers.

    Providers are instantiated once, in ``create_container``. Config reaches
    them as APP-scoped container context rather than as a constructor argument.
    """
