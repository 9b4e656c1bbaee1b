"""Tests for verso.server.resolve — output table first, exact-path fallback."""

import anyio

from verso.server.resolve import RequestResolver
from verso.site import Site


def _resolver(site: Site) -> RequestResolver:
    return RequestResolver(
        output_table=site.state.output_table,
        coordinator=site.state.coordinator,
        out_dir=site.config.out_path,
    )


class TestResolve:
    async def test_page_is_html(self, config) -> None:
        site = Site(config)
        await site.rebuild()

        resolution = await _resolver(site).resolve("/about")

        assert resolution is not None
        assert resolution.content_type == "text/html"
        assert resolution.artifact.path == config.out_path / "about" / "index.html"
        assert resolution.streamed
        assert not resolution.via_fallback

    async def test_root_and_trailing_slash(self, config) -> None:
        site = Site(config)
        await site.rebuild()
        resolver = _resolver(site)

        root = await resolver.resolve("/")
        team = await resolver.resolve("/about/team/")

        assert root is not None
        assert root.artifact.path == config.out_path / "index.html"
        assert team is not None
        assert team.artifact.path == config.out_path / "about" / "team.html"

    async def test_miss(self, config) -> None:
        site = Site(config)
        await site.rebuild()

        assert await _resolver(site).resolve("/missing") is None

    async def test_nothing_built_yet(self, config) -> None:
        site = Site(config)

        assert await _resolver(site).resolve("/") is None
        assert await _resolver(site).resolve("/data.json") is None


class TestFallback:
    async def test_known_extension(self, config) -> None:
        site = Site(config)
        await site.rebuild()

        resolution = await _resolver(site).resolve("/data.json")

        assert resolution is not None
        assert resolution.content_type == "application/json"
        assert resolution.via_fallback
        assert not resolution.streamed

    async def test_unknown_extension(self, config) -> None:
        site = Site(config)
        await site.rebuild()

        resolution = await _resolver(site).resolve("/module.wasm")

        assert resolution is not None
        assert resolution.content_type == "application/octet-stream"

    async def test_nested_asset(self, config) -> None:
        site = Site(config)
        await site.rebuild()

        resolution = await _resolver(site).resolve("/styles/main.css")

        assert resolution is not None
        assert resolution.content_type == "text/css"

    async def test_fallback_is_exact(self, config) -> None:
        site = Site(config)
        await site.rebuild()
        resolver = _resolver(site)

        assert await resolver.resolve("/main.css") is None
        assert await resolver.resolve("/styles") is None

    async def test_output_file_not_from_last_build(self, config) -> None:
        site = Site(config)
        await site.rebuild()
        (config.out_path / "stray.txt").write_text("left over")

        assert await _resolver(site).resolve("/stray.txt") is None


class TestDuringBuild:
    async def test_requests_wait_for_the_build(self, config) -> None:
        site = Site(config)
        resolver = _resolver(site)
        found: list[str] = []

        async def request(pathname: str) -> None:
            resolution = await resolver.resolve(pathname)
            assert resolution is not None
            assert not site.state.coordinator.is_building
            found.append(pathname)

        async with anyio.create_task_group() as tg:
            tg.start_soon(site.rebuild)
            with anyio.fail_after(5):
                while not site.state.coordinator.is_building:
                    await anyio.sleep(0)
            for pathname in ("/", "/about", "/about/team", "/data.json"):
                tg.start_soon(request, pathname)

        assert sorted(found) == ["/", "/about", "/about/team", "/data.json"]

    async def test_waiters_read_fresh_artifacts(self, config) -> None:
        site = Site(config)
        await site.rebuild()
        (config.src_path / "index.py").write_text("def render():\n    return '<p>home v2</p>'\n")
        (config.src_path / "about" / "index.py").write_text(
            "def render():\n    return '<p>about v2</p>'\n"
        )
        (config.src_path / "data.json").write_text('{"version": 2}\n')
        resolver = _resolver(site)
        bodies: dict[str, bytes] = {}

        async def request(pathname: str) -> None:
            resolution = await resolver.resolve(pathname)
            assert resolution is not None
            bodies[pathname] = await resolution.artifact.read_bytes()

        async with anyio.create_task_group() as tg:
            tg.start_soon(site.rebuild)
            with anyio.fail_after(5):
                while not site.state.coordinator.is_building:
                    await anyio.sleep(0)
            for pathname in ("/", "/about", "/data.json"):
                tg.start_soon(request, pathname)

        assert b"<p>home v2</p>" in bodies["/"]
        assert b"<p>about v2</p>" in bodies["/about"]
        assert bodies["/data.json"] == b'{"version": 2}\n'

    async def test_route_set_stable_across_rebuilds(self, config) -> None:
        site = Site(config)
        await site.rebuild()
        first = {entry.pathname for entry in site.state.output_table.entries()}

        await site.rebuild()
        second = {entry.pathname for entry in site.state.output_table.entries()}

        assert first == second == {"/", "/about", "/about/team"}
