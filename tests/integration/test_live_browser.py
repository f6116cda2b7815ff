"""
Live-browser checks against a small inline page.

Needs Chrome and chromedriver; set VIGIL_LIVE_BROWSER=1 to run.
"""

from urllib.parse import quote
import os

import pytest

pytest.importorskip("selenium")

from vigil import ElementNotFound, InvalidSelector, VigilConfig, VigilSession
from vigil.layers.sense.conditions import exact_text, hidden, text, value, visible

pytestmark = pytest.mark.skipif(
    os.environ.get("VIGIL_LIVE_BROWSER") != "1",
    reason="set VIGIL_LIVE_BROWSER=1 to run against a real browser",
)

PAGE = """
<html><body>
  <h1>Todo</h1>
  <form>
    <input id="new-todo" name="todo">
    <button id="add" type="button" onclick="setTimeout(add, 300)">Add</button>
  </form>
  <ul id="list"></ul>
  <div id="spinner">Loading</div>
  <script>
    function add() {
      var li = document.createElement('li');
      li.textContent = document.getElementById('new-todo').value;
      document.getElementById('list').appendChild(li);
    }
    setTimeout(function () { document.getElementById('spinner').style.display = 'none'; }, 500);
  </script>
</body></html>
"""


@pytest.fixture
def vigil():
    with VigilSession(config=VigilConfig(headless=True, timeout_ms=3000)) as session:
        session.open("data:text/html;charset=utf-8," + quote(PAGE))
        yield session


def test_add_todo(vigil):
    vigil.find("h1").should_have(exact_text("Todo"))
    vigil.find("#new-todo").set_value("Write tests").should_have(value("Write tests"))
    vigil.find("#add").click()

    vigil.find("#list li").should_be(visible).should_have(text("write tests"))
    assert vigil.find_all("#list li").texts() == ["Write tests"]
    assert not any(e.status.value == "failed" for e in vigil.recorder.entries)


def test_spinner_disappears(vigil):
    vigil.find("#spinner").should_be(hidden)
    vigil.find("#spinner").should_not_be(visible)


def test_missing_element(vigil):
    with pytest.raises(ElementNotFound):
        vigil.find("#nope").wait_until(visible, 500)


def test_invalid_selector(vigil):
    with pytest.raises(InvalidSelector):
        vigil.find("div[").should_be(visible)
