import pytest
from selenium.webdriver.common.by import By

from vigil.core.errors import ElementNotFound
from vigil.core.selectors import by_xpath
from vigil.layers.action import scripts
from vigil.reporters import StepStatus


@pytest.fixture
def files(tmp_path):
    first = tmp_path / "avatar.png"
    second = tmp_path / "resume.pdf"
    first.write_bytes(b"png")
    second.write_bytes(b"pdf")
    return first, second


def test_requires_at_least_one_file(dispatcher, driver):
    """Test that an empty upload is rejected without a lookup."""
    with pytest.raises(ValueError, match="No files to upload"):
        dispatcher.element("#upload").upload_file()
    assert driver.lookups == []


def test_missing_file_fails_before_touching_the_page(dispatcher, driver, clock, files, tmp_path):
    """Test that every file is checked before the input is resolved."""
    missing = tmp_path / "missing.txt"

    with pytest.raises(ValueError, match="File not found"):
        dispatcher.element("#upload").upload_file(str(files[0]), str(missing))

    assert driver.lookups == []
    assert clock.sleeps == []


def test_directory_is_not_a_file(dispatcher, driver, tmp_path):
    """Test that a directory path is rejected like a missing file."""
    folder = tmp_path / "photos"
    folder.mkdir()

    with pytest.raises(ValueError, match="File not found"):
        dispatcher.element("#upload").upload_file(str(folder))

    assert driver.lookups == []


def test_upload_single_file(dispatcher, driver, make_element, files, recorder):
    """Test that one file goes straight to the input."""
    field = driver.add("#upload", make_element("input", attributes={"type": "file"}))

    uploaded = dispatcher.element("#upload").upload_file(str(files[0]))

    assert uploaded == files[0].resolve()
    assert field.keys == [str(files[0].resolve())]
    assert recorder.entries[-1].description == "upload file avatar.png"
    assert recorder.entries[-1].status == StepStatus.PASSED


def test_upload_to_non_input_fails(dispatcher, driver, make_element, files, recorder):
    """Test that a non-input target fails the step."""
    driver.add("#drop", make_element("div", attributes={"id": "drop"}))

    with pytest.raises(ValueError, match='Cannot upload file because <div id="drop"></div> is not an INPUT'):
        dispatcher.element("#drop").upload_file(str(files[0]))

    assert recorder.entries[-1].status == StepStatus.FAILED


def test_non_input_is_rejected_before_looking_for_form(dispatcher, driver, make_element, files, clock):
    """Test that a multi-file upload to a non-input fails without waiting for a form."""
    driver.add("#drop", make_element("div"))

    with pytest.raises(ValueError, match="is not an INPUT"):
        dispatcher.element("#drop").upload_file(str(files[0]), str(files[1]))

    assert driver.lookups == [(By.CSS_SELECTOR, "#drop")]
    assert clock.sleeps == []


def test_upload_to_absent_input_times_out(dispatcher, files):
    """Test that a missing input raises ElementNotFound."""
    with pytest.raises(ElementNotFound):
        dispatcher.element("#upload").upload_file(str(files[0]))


def test_second_file_goes_to_cloned_input(dispatcher, driver, make_element, files):
    """Test that extra files go to inputs cloned into the form."""
    field = driver.add("#upload", make_element("input", attributes={"type": "file", "name": "docs"}))
    form = field.add_child(By.XPATH, "ancestor::form[1]", make_element("form"))
    clone = make_element("input")
    driver.script_handler = lambda script, *args: clone if script == scripts.CLONE_FILE_INPUT else None

    uploaded = dispatcher.element("#upload").upload_file(str(files[0]), str(files[1]))

    assert uploaded == files[0].resolve()
    assert field.keys == [str(files[0].resolve())]
    assert clone.keys == [str(files[1].resolve())]
    assert driver.scripts == [(scripts.CLONE_FILE_INPUT, (form, field))]


def test_multiple_files_need_an_enclosing_form(dispatcher, driver, make_element, files, recorder):
    """Test that nothing is attached when the form for extra files is missing."""
    field = driver.add("#upload", make_element("input"))

    with pytest.raises(ElementNotFound) as excinfo:
        dispatcher.element("#upload").upload_file(str(files[0]), str(files[1]))

    assert excinfo.value.selector == f"#upload/{by_xpath('ancestor::form[1]')}"
    assert field.keys == []
    assert driver.scripts == []
    assert recorder.entries[-1].status == StepStatus.FAILED


def test_upload_from_package(dispatcher, driver, make_element, tmp_path, monkeypatch):
    """Test uploading a data file shipped inside a package."""
    package = tmp_path / "fixtures_pkg"
    package.mkdir()
    (package / "__init__.py").write_text("")
    (package / "photo.jpg").write_bytes(b"jpg")
    monkeypatch.syspath_prepend(str(tmp_path))
    field = driver.add("#upload", make_element("input"))

    uploaded = dispatcher.element("#upload").upload_from_package("fixtures_pkg", "photo.jpg")

    assert uploaded.name == "photo.jpg"
    assert field.keys == [str(uploaded)]


def test_upload_from_package_missing_resource(dispatcher, tmp_path, monkeypatch):
    """Test that a missing package resource is reported by name."""
    package = tmp_path / "empty_pkg"
    package.mkdir()
    (package / "__init__.py").write_text("")
    monkeypatch.syspath_prepend(str(tmp_path))

    with pytest.raises(ValueError, match="File not found in package empty_pkg: nope.txt"):
        dispatcher.element("#upload").upload_from_package("empty_pkg", "nope.txt")
