"""
Name -> class table of the rice components.

Each component module decorates its class with `ComponentRegistry.register`
when it is imported; the orchestrator then looks components up by the names
used on the command line and in the `components` list of a profile.
"""

from typing import Any, Dict, List, Optional, Set, Type

from installer.base_component import BaseComponent


class ComponentRegistry:
    """
    Class-level table of every known rice component.

    The metadata dict attached at registration carries the component's
    `dependencies`, a one-line `description` for `list` and whether a
    failure is `fatal` to the whole run.
    """

    _registry: Dict[str, Type["BaseComponent"]] = {}

    @classmethod
    def register(cls, name: str, metadata: Optional[Dict[str, Any]] = None):
        """
        Class decorator adding a component under `name`.

        Raises:
            ValueError: `name` is taken by another component.
        """

        def decorator(
            component_class: Type["BaseComponent"],
        ) -> Type["BaseComponent"]:
            if name in cls._registry:
                raise ValueError(
                    f"Component name '{name}' is already taken by "
                    f"{cls._registry[name].__name__}"
                )

            if metadata:
                component_class.metadata = metadata

            cls._registry[name] = component_class
            return component_class

        return decorator

    @classmethod
    def get_component(cls, name: str) -> Type["BaseComponent"]:
        """
        Look up the class registered as `name`.

        Raises:
            KeyError: Unknown component name.
        """
        try:
            return cls._registry[name]
        except KeyError:
            known = ", ".join(sorted(cls._registry)) or "none"
            raise KeyError(
                f"Unknown component '{name}' (known components: {known})"
            ) from None

    @classmethod
    def get_all_components(cls) -> Dict[str, Type["BaseComponent"]]:
        return cls._registry.copy()

    @classmethod
    def get_component_dependencies(cls, name: str) -> Set[str]:
        """Names `name` declares in its `dependencies` metadata."""
        component_class = cls.get_component(name)
        metadata = getattr(component_class, "metadata", {})
        return set(metadata.get("dependencies", []))

    @classmethod
    def resolve_dependencies(cls, components: List[str]) -> List[str]:
        """
        Expand `components` with everything they depend on, dependencies
        first.

        Requested names keep their relative order; each component's own
        dependencies are pulled in alphabetically so two runs with the same
        request always apply steps in the same order. A component appears
        once however many others need it.

        Raises:
            KeyError: A requested component or one of its dependencies is unknown.
            ValueError: Two or more components depend on each other.
        """
        ordered: List[str] = []
        done: Set[str] = set()
        chain: List[str] = []

        def visit(component: str):
            if component in chain:
                cycle = chain[chain.index(component):] + [component]
                raise ValueError(
                    f"Circular dependency between components: {' -> '.join(cycle)}"
                )
            if component in done:
                return

            chain.append(component)
            for dependency in sorted(cls.get_component_dependencies(component)):
                visit(dependency)
            chain.pop()

            done.add(component)
            ordered.append(component)

        for component in components:
            visit(component)

        return ordered
