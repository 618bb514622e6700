"""Plain-text graph loading.

The format is line oriented::

    4          # number of vertices
    A
    B
    C
    D
    A B 1      # one undirected edge per line
    B C 2

Blank lines and anything after ``#`` are ignored.
"""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from ..errors import GraphFormatError
from .model import Graph

logger = logging.getLogger(__name__)


def _significant_lines(text: str) -> Iterator[Tuple[int, str]]:
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if line:
            yield number, line


def parse_graph(text: str) -> Graph:
    """将文本描述解析为 :class:`Graph`。

    异常:
        GraphFormatError: 顶点数缺失或非法、顶点不足、重复顶点、
            边行格式错误、权重无法解析或不是有限数、引用了未声明的顶点
    """
    lines: List[Tuple[int, str]] = list(_significant_lines(text))
    if not lines:
        raise GraphFormatError("missing vertex count")

    number, header = lines[0]
    try:
        count = int(header)
    except ValueError:
        raise GraphFormatError(f"invalid vertex count {header!r}", number) from None
    if count < 0:
        raise GraphFormatError(f"negative vertex count {count}", number)
    if len(lines) - 1 < count:
        raise GraphFormatError(f"expected {count} vertex names, found {len(lines) - 1}")

    graph = Graph()
    for number, name in lines[1 : count + 1]:
        if len(name.split()) != 1:
            raise GraphFormatError(f"vertex name {name!r} contains whitespace", number)
        try:
            graph.add_vertex(name)
        except ValueError as err:
            raise GraphFormatError(str(err), number) from None

    for number, line in lines[count + 1 :]:
        parts = line.split()
        if len(parts) != 3:
            raise GraphFormatError(f"expected 'name1 name2 weight', got {line!r}", number)
        u, v, raw_weight = parts
        try:
            weight = float(raw_weight)
        except ValueError:
            raise GraphFormatError(f"invalid weight {raw_weight!r}", number) from None
        if not math.isfinite(weight):
            raise GraphFormatError(f"invalid weight {raw_weight!r}", number)
        if weight.is_integer():
            weight = int(weight)
        try:
            graph.add_edge(u, v, weight)
        except KeyError as err:
            raise GraphFormatError(err.args[0], number) from None
        except ValueError as err:
            raise GraphFormatError(str(err), number) from None

    logger.debug("Parsed graph with %d vertices and %d edges", len(graph), len(lines) - count - 1)
    return graph


def load_graph(path: Union[str, Path]) -> Graph:
    """从文件读取图，文件编码为 UTF-8。"""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            text = handle.read()
    except UnicodeDecodeError as err:
        raise GraphFormatError(f"{path} is not valid UTF-8: {err.reason}") from None
    return parse_graph(text)
