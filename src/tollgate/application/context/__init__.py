from tollgate.application.context.actor_context import ActorContext

__all__ = ["ActorContext"]
