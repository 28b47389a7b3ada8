"""
XML 文件斷言

以路徑查詢 (ElementPath，xml.etree 內建的 XPath 子集) 驗證 XML 文件的結構與屬性：
元素存在 / 不存在、屬性值、正規表達式、URI 格式、重複的 key 屬性。

查詢一律從「文件節點」開始（根元素的虛擬父節點），所以：
    "root/item" / "/root/item"   從根元素 root 開始
    "//item"                     整份文件中所有 item（包含根元素本身）

用法：
    from verifykit.core.xml_tester import XmlTester

    tester = XmlTester(xml_string, exception_prefix="web.config: ")
    tester.assert_element_exists("/configuration/appSettings")
    tester.assert_attribute_value("//add[@key='Env']", "value", "prod")
    tester.assert_attribute_values("//endpoint", {"binding": "basicHttpBinding", "name": "svc"})
    tester.assert_attribute_value_is_well_formed_uri("//endpoint", "address")
    tester.assert_no_duplicate_elements("//appSettings/add", "key")

    # 從檔案載入（第一次查詢時才讀檔解析）
    tester = XmlTester.from_file("build/web.config")
"""

from __future__ import annotations

import os
import re
from collections import defaultdict
from pathlib import Path
from typing import Callable, Iterable, Mapping
from xml.etree import ElementTree

from verifykit.config.config import Config
from verifykit.core.exceptions import UsageError, XmlTesterError
from verifykit.utils.allure_helper import attach_failure
from verifykit.utils.logger import logger
from verifykit.utils.text import normalized
from verifykit.utils.uri import is_well_formed_uri

Element = ElementTree.Element
# 回傳 None 代表通過，否則回傳錯誤描述
ValueChecker = Callable[[str], "str | None"]


def _local_name(name: str) -> str:
    """'{uri}local' -> 'local'"""
    return name.rsplit("}", 1)[-1]


class XmlTester:
    """XML 文件斷言工具，一份文件建立一次，可重複呼叫各種 assert"""

    def __init__(
        self,
        source: str | os.PathLike | ElementTree.ElementTree | Element,
        exception_prefix: str | None = None,
    ):
        """
        Args:
            source: XML 字串（延遲解析）、檔案路徑（延遲讀取）、
                    已解析的 ElementTree 或根元素
            exception_prefix: 失敗訊息前綴，預設 Config.XML_EXCEPTION_PREFIX
        """
        self._xml_string: str | None = None
        self._xml_path: Path | None = None
        self._document: ElementTree.ElementTree | None = None

        if isinstance(source, str):
            self._xml_string = source
        elif isinstance(source, os.PathLike):
            self._xml_path = Path(source)
        elif isinstance(source, ElementTree.ElementTree):
            self._document = source
        elif ElementTree.iselement(source):
            self._document = ElementTree.ElementTree(source)
        else:
            raise UsageError(f"不支援的 XML 來源型別: {type(source).__name__}")

        self._exception_prefix = (
            Config.XML_EXCEPTION_PREFIX if exception_prefix is None else exception_prefix
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike, exception_prefix: str | None = None) -> "XmlTester":
        """從檔案建立，第一次查詢時才讀檔解析"""
        return cls(Path(path), exception_prefix)

    @property
    def document(self) -> ElementTree.ElementTree:
        """受測的文件；第一次存取時解析並快取"""
        if self._document is None:
            if self._xml_path is not None:
                logger.debug(f"[XmlTester] 解析檔案: {self._xml_path}")
                self._document = ElementTree.parse(self._xml_path)
            else:
                logger.debug(f"[XmlTester] 解析 XML 字串 ({len(self._xml_string)} 字元)")
                self._document = ElementTree.ElementTree(ElementTree.fromstring(self._xml_string))
        return self._document

    # ── 元素 ──

    def assert_element_exists(self, expression: str) -> Element:
        """
        驗證路徑至少找到一個元素。

        Returns:
            第一個符合的元素

        Raises:
            XmlTesterError: 找不到元素
        """
        elem = self.get_element(expression)
        if elem is None:
            self._fail(f"Element not found: {self._format(expression)}", expression)
        return elem

    def assert_element_does_not_exist(self, expression: str) -> None:
        """驗證路徑找不到任何元素"""
        if self.get_element(expression) is not None:
            self._fail(f"Element should not exist: {self._format(expression)}", expression)

    def assert_no_duplicate_elements(self, element_expression: str, key_attribute_name: str, *ignore_keys: str) -> None:
        """
        驗證帶有 key 屬性的元素中，沒有重複的 key 值。

        先掃完所有元素，再一次回報全部重複的 key。

        Args:
            element_expression: 元素路徑
            key_attribute_name: 用來判斷重複的屬性
            ignore_keys: 允許重複的 key 值
        """
        groups: dict[str, list[Element]] = defaultdict(list)
        for elem in self.get_elements(element_expression):
            key = self.get_attribute_value(elem, key_attribute_name)
            if key is not None:
                groups[key].append(elem)

        duplicates = [key for key, elems in groups.items() if len(elems) > 1 and key not in ignore_keys]

        if duplicates:
            keys = '", "'.join(duplicates)
            self._fail(
                f"Multiple {self._format(element_expression, key_attribute_name)}"
                f' where {key_attribute_name} = "{keys}".',
                element_expression,
                key_attribute_name,
            )

    # ── 屬性 ──

    def assert_attribute_value(self, element_expression: str, attribute_name: str, expected_value: str) -> None:
        """驗證屬性值完全相同"""
        elem = self.assert_element_exists(element_expression)
        self._assert_element_attribute_value(
            elem, element_expression, attribute_name, self._equals_checker(expected_value)
        )

    def assert_attribute_values(
        self,
        element_expression: str,
        attribute_names_and_expected_values: Mapping[str, str] | Iterable[tuple[str, str]],
    ) -> None:
        """
        驗證多個屬性值，依序檢查，遇到第一個不符就失敗。

        Args:
            element_expression: 元素路徑
            attribute_names_and_expected_values: {屬性名: 預期值} 或 (屬性名, 預期值) 序列
        """
        elem = self.assert_element_exists(element_expression)

        pairs = attribute_names_and_expected_values
        if isinstance(pairs, Mapping):
            pairs = pairs.items()

        for attribute_name, expected_value in pairs:
            self._assert_element_attribute_value(
                elem, element_expression, attribute_name, self._equals_checker(expected_value)
            )

    def assert_attribute_value_match(self, element_expression: str, attribute_name: str, pattern: str | re.Pattern) -> None:
        """驗證屬性值符合正規表達式 (re.search)"""
        elem = self.assert_element_exists(element_expression)
        source = pattern.pattern if isinstance(pattern, re.Pattern) else pattern

        self._assert_element_attribute_value(
            elem, element_expression, attribute_name,
            lambda actual: None
            if re.search(pattern, actual)
            else f'Value "{actual}" doesn\'t match regex pattern "{source}".',
        )

    def assert_attribute_value_is_well_formed_uri(self, element_expression: str, attribute_name: str) -> None:
        """驗證屬性值是格式正確的 URI（絕對或相對）"""
        elem = self.assert_element_exists(element_expression)

        self._assert_element_attribute_value(
            elem, element_expression, attribute_name,
            lambda actual: None
            if is_well_formed_uri(actual)
            else f'Value "{actual}" is not a well-formed URI string.',
        )

    def assert_element_does_not_have_attribute(self, element_expression: str, attribute_name: str) -> None:
        """驗證元素存在，但沒有指定屬性"""
        elem = self.assert_element_exists(element_expression)

        if self._attribute_values(elem, attribute_name):
            self._fail(
                f"{self._format(element_expression, attribute_name)}: Attribute should not exist.",
                element_expression,
                attribute_name,
            )

    def get_attribute_value(self, elem: Element, attribute_name: str) -> str | None:
        """
        取得元素的屬性值。

        Returns:
            屬性值；不存在時回傳 None

        Raises:
            XmlTesterError: 同名屬性超過一個
        """
        values = self._attribute_values(elem, attribute_name)

        if len(values) == 1:
            return values[0]
        if not values:
            return None

        self._fail(f"{elem.tag} [{attribute_name}] attribute count = {len(values)}.", attribute=attribute_name)

    # ── 查詢 ──

    def get_element(self, expression: str) -> Element | None:
        """第一個符合路徑的元素，找不到回傳 None"""
        elements = self.get_elements(expression)
        return elements[0] if elements else None

    def get_elements(self, expression: str) -> list[Element]:
        """所有符合路徑的元素（文件順序，不重複）"""
        query = "." + expression if expression.startswith("/") else expression

        seen: set[int] = set()
        result: list[Element] = []
        for elem in self._document_node().iterfind(query):
            if id(elem) not in seen:
                seen.add(id(elem))
                result.append(elem)
        return result

    # ── 內部 ──

    def _document_node(self) -> Element:
        """
        以根元素為唯一子節點的虛擬節點，代表文件本身。
        ElementTree 的元素不記錄 parent，append 不會影響原文件。
        """
        node = ElementTree.Element("")
        node.append(self.document.getroot())
        return node

    def _assert_element_attribute_value(
        self, elem: Element, element_expression: str, attribute_name: str, value_checker: ValueChecker
    ) -> None:
        actual = self.get_attribute_value(elem, attribute_name)

        if actual is None:
            self._fail(
                "Element found, but attribute does not exist: "
                f"{self._format(element_expression, attribute_name)}",
                element_expression,
                attribute_name,
            )

        error_message = value_checker(actual)
        if error_message:
            self._fail(
                f"{self._format(element_expression, attribute_name)}: {error_message}",
                element_expression,
                attribute_name,
            )

    @staticmethod
    def _equals_checker(expected_value: str) -> ValueChecker:
        return (
            lambda actual: None
            if normalized(actual) == normalized(expected_value)
            else f"Expected: <{expected_value}> actual: <{actual}>"
        )

    @staticmethod
    def _attribute_values(elem: Element, attribute_name: str) -> list[str]:
        """
        符合名稱的所有屬性值。
        '{uri}local' 與不帶 namespace 的屬性都精準比對；
        不帶 namespace 的名稱找不到時，才比對所有 namespace 的 local name。
        """
        if attribute_name in elem.attrib:
            return [elem.attrib[attribute_name]]
        if attribute_name.startswith("{"):
            return []
        return [value for name, value in elem.attrib.items() if _local_name(name) == attribute_name]

    @staticmethod
    def _format(element_expression: str, attribute_name: str | None = None) -> str:
        attribute_string = "" if attribute_name is None else f"@{attribute_name}"
        return f"{element_expression}{attribute_string}"

    def _fail(self, message: str, path: str = "", attribute: str | None = None) -> None:
        """以 XmlTesterError 回報失敗"""
        error = XmlTesterError(f"{self._exception_prefix}{message}", path=path, attribute=attribute)
        logger.info(f"[XmlTester] 失敗: {error}")
        attach_failure(error)
        raise error
