from __future__ import annotations

import asyncio
import shlex
from argparse import ArgumentParser, Namespace
from typing import Optional

from guwen_reader.core.settings import Settings
from guwen_reader.core.startup import browse_lifespan
from guwen_reader.models.browse_models import Notice, RenderView
from guwen_reader.models.browsing import BrowsingMethod, ByDynasty, ByKeyword, ByPage, ByWriter, build_method
from guwen_reader.services.browse import BrowseSession
from guwen_reader.utils.text_processing import MASK_LEVELS, mask_content, resolve_mask_level

HELP_TEXT = """\
命令:
  n / p                 下一个 / 上一个
  N / P                 下一页 / 前一页
  s <方法> [值] [页数]   搜索 (方法: page, writer, dynasty, keyword)
  f <文本>              按内容查找
  m <等级>              背诵遮挡 (无 轻 中 重 全)
  t / r / c             翻译 / 注释 / 赏析
  h                     帮助
  q                     退出"""


def parse_args(argv: Optional[list[str]] = None) -> Namespace:
    parser = ArgumentParser(
        description=(
            "Browse the guwen classical-text collection in the terminal. "
            "Run: python -m guwen_reader.scripts.browse --writer 李白"
        )
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--writer", help="按作者浏览")
    group.add_argument("--dynasty", help="按朝代浏览")
    group.add_argument("--keyword", help="按关键字浏览")
    parser.add_argument("--page", type=int, default=1, help="起始页数 (>= 1)")
    parser.add_argument("--log-level", help="覆盖 LOG_LEVEL")
    return parser.parse_args(argv)


def initial_method(args: Namespace) -> BrowsingMethod:
    if args.writer:
        return ByWriter(args.writer)
    if args.dynasty:
        return ByDynasty(args.dynasty)
    if args.keyword:
        return ByKeyword(args.keyword)
    return ByPage()


def _flag(value: Optional[str]) -> str:
    return "[ √ ]" if value else "[ × ]"


def render_view(view: RenderView) -> str:
    record = view.record
    lines = [
        f"标题: {record.title}",
        f"作者: {record.author or '-'}",
        f"注释: {_flag(record.notes)}  翻译: {_flag(record.translation)}  赏析: {_flag(record.commentary)}",
        f"总数: {view.total if view.total is not None else '-'}  页数: {view.page_number}  索引: {view.item_index}  方法: {view.method_label}",
        "",
        record.body,
    ]
    return "\n".join(lines)


def render_notice(notice: Notice) -> str:
    return f"! {notice.message}"


class Browser:
    """Line-driven presentation layer: reads commands, prints session updates."""

    def __init__(self, session: BrowseSession) -> None:
        self.session = session
        self.last_view: Optional[RenderView] = None

    def drain(self) -> None:
        while not self.session.updates.empty():
            outcome = self.session.updates.get_nowait()
            if isinstance(outcome, RenderView):
                self.last_view = outcome
                print(render_view(outcome))
            else:
                print(render_notice(outcome))

    def show_section(self, name: str, text: Optional[str]) -> None:
        if self.last_view is None:
            print("! 内容为空!")
            return
        print(f"[{name}]")
        print(text if text else "×")

    async def handle(self, line: str) -> bool:
        try:
            parts = shlex.split(line)
        except ValueError:
            parts = line.split()
        if not parts:
            return True
        command, args = parts[0], parts[1:]

        if command == "q":
            return False
        if command == "h":
            print(HELP_TEXT)
        elif command == "n":
            await self.session.next_item()
        elif command == "p":
            await self.session.prev_item()
        elif command == "N":
            await self.session.next_page()
        elif command == "P":
            await self.session.prev_page()
        elif command == "s":
            await self._search(args)
        elif command == "f" and args:
            await self.session.resolve_by_content(" ".join(args))
        elif command == "m" and args:
            self._mask(args[0])
        elif command == "t":
            self.show_section("翻译", self.last_view and self.last_view.record.translation)
        elif command == "r":
            self.show_section("注释", self.last_view and self.last_view.record.notes)
        elif command == "c":
            self.show_section("赏析", self.last_view and self.last_view.record.commentary)
        else:
            print(HELP_TEXT)
        self.drain()
        return True

    async def _search(self, args: list[str]) -> None:
        if not args:
            print(HELP_TEXT)
            return
        kind = args[0]
        value = ""
        if kind == "page":
            page_raw = args[1] if len(args) > 1 else "1"
        else:
            value = args[1] if len(args) > 1 else ""
            page_raw = args[2] if len(args) > 2 else "1"
        try:
            method = build_method(kind, value)
        except ValueError as exc:
            print(f"! {exc}")
            return
        try:
            page = int(page_raw)
        except ValueError:
            print("! 请输入正整数( >= 1)")
            return
        await self.session.query(method, page)

    def _mask(self, level_raw: str) -> None:
        if self.last_view is None:
            print("! 内容为空!")
            return
        try:
            level = resolve_mask_level(level_raw)
        except ValueError:
            print(f"! 可选等级: {' '.join(MASK_LEVELS)}")
            return
        print(mask_content(self.last_view.record.body, level))


async def run(args: Namespace) -> None:
    settings = Settings()
    if args.log_level:
        settings.LOG_LEVEL = args.log_level

    async with browse_lifespan(settings) as session:
        browser = Browser(session)
        await session.query(initial_method(args), args.page)
        browser.drain()
        print(HELP_TEXT)
        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            if not await browser.handle(line.strip()):
                break


def main() -> None:
    args = parse_args()
    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
