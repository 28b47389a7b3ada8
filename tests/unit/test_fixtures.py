"""
conftest.py fixtures 單元測試
驗證 xml_tester / assert_raises / action_tester fixtures 可直接在測試中使用。
"""

import pytest


class Greeter:
    async def greet(self, name):
        return f"hi {name}"


@pytest.mark.unit
class TestFixtures:

    @pytest.mark.unit
    def test_xml_tester_fixture(self, xml_tester):
        xml_tester("<root><a id='1'/></root>").assert_attribute_value("//a", "id", "1")

    @pytest.mark.unit
    def test_assert_raises_fixture(self, assert_raises):
        assert_raises.of_type(ZeroDivisionError).when_executing(lambda: 1 / 0)

    @pytest.mark.unit
    def test_action_tester_fixture(self, action_tester):
        assert action_tester(Greeter()).action("greet", "bob").invoke() == "hi bob"
