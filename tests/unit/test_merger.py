"""
Tests for the Podfile merge engine.

This test suite covers:
1. The single plugin apply/re-apply/remove scenario
2. Idempotence and round-trip
3. Isolation between plugins (blocks, hook calls, platform rows)
4. Collapse to delete
5. Hook aggregate uniqueness and ordering
6. Missing fragment and missing project Podfile
"""

import pytest

from podmerge.podfile.merger import MergeAction, PodfileMerger
from podmerge.podfile.platform import PlatformSectionManager

HOOK_A = 'post_install do |installer|\n  puts "a"\nend'


def _normalize(text: str) -> str:
    """Drop blank lines and surrounding whitespace."""
    return "\n".join(line.rstrip() for line in text.splitlines() if line.strip())


def _fragment_path(owner: str) -> str:
    return f"plugins/{owner}/Podfile"


@pytest.fixture
def merger():
    return PodfileMerger("MyApp", PlatformSectionManager())


def _apply(merger, owner, fragment, project_text):
    result = merger.apply(_fragment_path(owner), owner, fragment, project_text)
    if result.action is MergeAction.UNCHANGED:
        return project_text
    return result.content


def _remove(merger, owner, project_text):
    return merger.remove(_fragment_path(owner), owner, project_text).content


class TestSinglePluginScenario:
    """Test the full lifecycle of a single plugin."""

    def test_apply_to_missing_podfile(self, merger):
        """First apply writes block, function and hook aggregate."""
        result = merger.apply("plugins/a/Podfile", "a", HOOK_A, None)

        assert result.action is MergeAction.WRITE
        assert result.content == (
            'use_frameworks!\n\ntarget "MyApp" do\n'
            "# Begin Podfile - plugins/a/Podfile\n"
            "def post_installa_0(installer)\n"
            '  puts "a"\n'
            "end\n"
            "# End Podfile\n"
            "\n"
            "post_install do |installer|\n"
            "  post_installa_0 installer\n"
            "end\n"
            "end"
        )

    def test_reapply_is_unchanged(self, merger):
        """Applying the identical fragment again leaves the Podfile alone."""
        content = merger.apply("plugins/a/Podfile", "a", HOOK_A, None).content

        result = merger.apply("plugins/a/Podfile", "a", HOOK_A, content)

        assert result.action is MergeAction.UNCHANGED
        assert result.content is None

    def test_remove_last_plugin_deletes(self, merger):
        """Removing the only contributor collapses to a delete."""
        content = merger.apply("plugins/a/Podfile", "a", HOOK_A, None).content

        result = merger.remove("plugins/a/Podfile", "a", content)

        assert result.action is MergeAction.DELETE
        assert result.content is None

    def test_remove_last_plugin_without_hook_deletes(self, merger):
        """A Podfile without hooks collapses to a delete as well."""
        content = merger.apply("plugins/a/Podfile", "a", "pod 'Alamofire'", None).content

        assert merger.remove("plugins/a/Podfile", "a", content).action is MergeAction.DELETE

    def test_remove_platform_only_plugin_deletes(self, merger):
        """A plugin with only a platform row and pods collapses to a delete."""
        content = merger.apply("plugins/a/Podfile", "a", "platform :ios, '12.0'\npod 'A'", None).content

        result = merger.remove("plugins/a/Podfile", "a", content)

        assert result.action is MergeAction.DELETE

    def test_remove_platform_and_hook_plugin_deletes(self, merger):
        """A plugin with a platform row and a hook collapses to a delete."""
        fragment = "platform :ios, '12.0'\npod 'A'\n" + HOOK_A
        content = merger.apply("plugins/a/Podfile", "a", fragment, None).content

        result = merger.remove("plugins/a/Podfile", "a", content)

        assert result.action is MergeAction.DELETE

    def test_reapply_changed_fragment(self, merger):
        """A changed fragment replaces the old block in place."""
        content = _apply(merger, "a", "pod 'A', '1.0'\n" + HOOK_A, None)

        content = _apply(merger, "a", "pod 'A', '2.0'\n" + HOOK_A, content)

        assert content.count("# Begin Podfile - plugins/a/Podfile") == 1
        assert "pod 'A', '2.0'" in content
        assert "pod 'A', '1.0'" not in content
        assert content.count("  post_installa_0 installer\n") == 1


class TestProperties:
    """Test merge invariants over several documents."""

    DOCUMENTS = [
        None,
        'use_frameworks!\n\ntarget "MyApp" do\npod \'UserPod\'\nend',
        "platform :ios, '12.0'\ntarget 'Legacy' do\nend\n",
    ]

    @pytest.mark.parametrize("document", DOCUMENTS)
    @pytest.mark.parametrize(
        "fragment",
        [HOOK_A, "pod 'A'", "platform :ios, '11.0'\npod 'A'\n" + HOOK_A],
    )
    def test_idempotence(self, merger, document, fragment):
        """apply(apply(D)) == apply(D)."""
        once = _apply(merger, "a", fragment, document)
        twice = _apply(merger, "a", fragment, once)

        assert twice == once

    @pytest.mark.parametrize("document", DOCUMENTS[1:])
    def test_round_trip(self, merger, document):
        """remove(apply(D)) == D, whitespace aside."""
        fragment = "platform :ios, '11.0'\npod 'A'\n" + HOOK_A

        applied = _apply(merger, "a", fragment, document)
        removed = _remove(merger, "a", applied)

        assert _normalize(removed) == _normalize(document)

    def test_round_trip_with_other_plugin(self, merger):
        """Round-trip holds on top of another plugin's contribution."""
        document = _apply(merger, "b", "platform :ios, '10.0'\npod 'B'\n" + HOOK_A, None)

        applied = _apply(merger, "a", "platform :ios, '12.0'\npod 'A'\n" + HOOK_A, document)
        removed = _remove(merger, "a", applied)

        assert _normalize(removed) == _normalize(document)

    def test_user_content_is_kept(self, merger):
        """Content outside managed regions survives apply and remove."""
        document = 'use_frameworks!\n\ntarget "MyApp" do\npod \'UserPod\'\nend'

        applied = _apply(merger, "a", HOOK_A, document)
        result = merger.remove("plugins/a/Podfile", "a", applied)

        assert "pod 'UserPod'" in applied
        assert result.action is MergeAction.WRITE
        assert "pod 'UserPod'" in result.content
        assert "post_installa" not in result.content


class TestIsolation:
    """Test that plugins do not disturb each other."""

    def test_remove_first_keeps_second(self, merger):
        """Removing A keeps B's block, hook call and platform row."""
        content = _apply(merger, "a", "platform :ios, '11.0'\npod 'A'\n" + HOOK_A, None)
        content = _apply(merger, "b", "platform :ios, '12.0'\npod 'B'\n" + HOOK_A, content)
        block_b = merger.build_block("plugins/b/Podfile", "b", "platform :ios, '12.0'\npod 'B'\n" + HOOK_A)

        result = merger.remove("plugins/a/Podfile", "a", content)

        assert result.action is MergeAction.WRITE
        assert block_b.content in result.content
        assert "  post_installb_0 installer\n" in result.content
        assert "# Begin Platform Section - plugins/b/Podfile\nplatform :ios, '12.0'" in result.content
        assert "plugins/a/Podfile" not in result.content
        assert "post_installa_" not in result.content

    def test_remove_winning_platform_restores_other(self, merger):
        """Removing the plugin that owns the platform section hands it over."""
        content = _apply(merger, "a", "platform :ios, '13.0'\npod 'A'", None)
        content = _apply(merger, "b", "platform :ios, '12.0'\npod 'B'", content)
        assert "# Begin Platform Section - plugins/a/Podfile" in content

        result = merger.remove("plugins/a/Podfile", "a", content)

        assert "# Begin Platform Section - plugins/b/Podfile\nplatform :ios, '12.0'" in result.content
        assert result.content.count("# Begin Platform Section") == 1

    def test_similar_owner_names(self, merger):
        """Owners sharing a name prefix keep their own hook calls."""
        content = _apply(merger, "a", HOOK_A, None)
        content = _apply(merger, "ab", HOOK_A, content)

        result = merger.remove("plugins/a/Podfile", "a", content)

        assert "  post_installab_0 installer\n" in result.content
        assert "post_installa_0" not in result.content

    def test_most_recent_block_first(self, merger):
        """The most recently applied block comes first."""
        content = _apply(merger, "a", "pod 'A'", None)
        content = _apply(merger, "b", "pod 'B'", content)

        assert content.index("plugins/b/Podfile") < content.index("plugins/a/Podfile")


class TestHookAggregate:
    """Test hook aggregation across plugins."""

    def test_unique_calls_in_application_order(self, merger):
        """N fragments give N distinct calls, each once, in first-application order."""
        content = None
        for owner in ["c", "a", "b"]:
            content = _apply(merger, owner, HOOK_A, content)

        aggregate = content[content.index("post_install do |installer|\n") :]
        calls = [line.strip() for line in aggregate.splitlines()[1:-2]]

        assert calls == [
            "post_installc_0 installer",
            "post_installa_0 installer",
            "post_installb_0 installer",
        ]
        assert content.count("post_install do |installer|\n") == 1

    def test_reapplied_owner_moves_to_end(self, merger):
        """A re-applied, changed fragment is called last."""
        content = _apply(merger, "a", HOOK_A, None)
        content = _apply(merger, "b", HOOK_A, content)
        content = _apply(merger, "a", "pod 'A'\n" + HOOK_A, content)

        aggregate = content[content.index("post_install do |installer|\n") :]

        assert aggregate.index("post_installb_0") < aggregate.index("post_installa_0")

    def test_multiple_hooks_in_one_fragment(self, merger):
        """Every hook block of a fragment gets a call."""
        fragment = HOOK_A + "\n" + "post_install do\n  puts 'two'\nend"

        content = _apply(merger, "a", fragment, None)

        assert "def post_installa_0(installer)" in content
        assert "def post_installa_1\n" in content
        assert "  post_installa_0 installer\n  post_installa_1\nend" in content

    def test_malformed_hook_is_not_wired(self, merger):
        """A hook block that does not match is merged without a call."""
        content = _apply(merger, "a", "post_install { |i| puts 'x' }", None)

        assert "post_install { |i| puts 'x' }" in content
        assert "post_install do |installer|" not in content


class TestMissingFiles:
    """Test missing fragment and missing project Podfile."""

    def test_missing_fragment_removes(self, merger):
        """A missing fragment behaves as a removal."""
        content = _apply(merger, "a", HOOK_A, None)

        result = merger.apply("plugins/a/Podfile", "a", None, content)

        assert result.action is MergeAction.DELETE

    def test_remove_without_podfile(self, merger):
        """Removing from a missing Podfile does nothing."""
        result = merger.remove("plugins/a/Podfile", "a", None)

        assert result.action is MergeAction.UNCHANGED

    def test_missing_fragment_without_podfile(self, merger):
        """Nothing to apply and nothing to remove."""
        assert merger.apply("plugins/a/Podfile", "a", None, None).action is MergeAction.UNCHANGED


class TestLineEndings:
    """Test Podfiles with CRLF line endings."""

    def test_apply_to_crlf_podfile(self, merger):
        """A CRLF Podfile is merged as if it had \\n endings."""
        content = _apply(merger, "a", HOOK_A, None)
        crlf = content.replace("\n", "\r\n")

        result = merger.apply("plugins/b/Podfile", "b", "pod 'B'", crlf)

        assert result.content == _apply(merger, "b", "pod 'B'", content)
        assert result.content.count('target "MyApp" do') == 1
        assert "\r" not in result.content

    def test_reapply_to_crlf_podfile_is_unchanged(self, merger):
        """An up to date CRLF Podfile is left alone."""
        content = _apply(merger, "a", HOOK_A, None).replace("\n", "\r\n")

        assert merger.apply("plugins/a/Podfile", "a", HOOK_A, content).action is MergeAction.UNCHANGED

    def test_remove_from_crlf_podfile_deletes(self, merger):
        """Removing the last plugin from a CRLF Podfile collapses to a delete."""
        content = _apply(merger, "a", "platform :ios, '12.0'\n" + HOOK_A, None).replace("\n", "\r\n")

        assert merger.remove("plugins/a/Podfile", "a", content).action is MergeAction.DELETE


class TestUserAggregate:
    """Test hook aggregates written by the user."""

    def test_user_aggregate_with_calls_survives(self, merger):
        """A user aggregate that keeps its own lines is kept on remove."""
        document = (
            'use_frameworks!\n\ntarget "MyApp" do\n'
            "post_install do |installer|\n  puts 'user'\nend\nend"
        )

        applied = _apply(merger, "a", HOOK_A, document)
        removed = _remove(merger, "a", applied)

        assert "  puts 'user'\n  post_installa_0 installer\n" in applied
        assert _normalize(removed) == _normalize(document)

    def test_empty_user_aggregate_is_shared(self, merger):
        """An empty user aggregate receives the calls and goes away with the last one."""
        document = (
            'use_frameworks!\n\ntarget "MyApp" do\n'
            "pod 'UserPod'\n\npost_install do |installer|\nend\nend"
        )

        applied = _apply(merger, "a", HOOK_A, document)
        removed = _remove(merger, "a", applied)

        assert applied.count("post_install do |installer|\n") == 1
        assert _normalize(removed) == _normalize('use_frameworks!\n\ntarget "MyApp" do\npod \'UserPod\'\nend')
