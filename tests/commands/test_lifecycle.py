"""Tests for lifecycle hook name expansion."""

from hookcli.commands.lifecycle import PHASES, event_hook_name, lifecycle_hooks


class TestLifecycleHooks:
    """Test hook naming and ordering."""

    def test_hooks_follow_event_order(self, builtin_registry):
        hooks = lifecycle_hooks(builtin_registry.lookup("deploy"))
        assert [hook.name for hook in hooks] == [
            "before:deploy:deploy",
            "deploy:deploy",
            "after:deploy:deploy",
            "before:deploy:finalize",
            "deploy:finalize",
            "after:deploy:finalize",
        ]

    def test_multi_word_path(self, builtin_registry):
        definition = builtin_registry.lookup("deploy function")
        assert event_hook_name(definition, "packageFunction") == "deploy:function:packageFunction"

    def test_root_hooks_use_event_name(self, builtin_registry):
        hooks = lifecycle_hooks(builtin_registry.root)
        assert hooks[0].name == "before:initializeService"
        assert hooks[1].name == "initializeService"

    def test_phases(self, builtin_registry):
        hooks = lifecycle_hooks(builtin_registry.lookup("info"))
        assert tuple(hook.phase for hook in hooks) == PHASES
        assert {hook.event for hook in hooks} == {"info"}
