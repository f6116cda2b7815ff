"""
Browser-side snippets used by interactions and read queries.

Every snippet receives its inputs positionally as arguments[n].
"""

FIRE_EVENT = """
if (document.createEventObject) {
  var evt = document.createEventObject();
  return arguments[0].fireEvent('on' + arguments[1], evt);
}
else {
  var evt = document.createEvent('HTMLEvents');
  evt.initEvent(arguments[1], true, true);
  return !arguments[0].dispatchEvent(evt);
}
"""

SET_VALUE = "arguments[0].value = arguments[1];"

JQUERY_AVAILABLE = "return (typeof jQuery == 'function');"

# Sets the value, then replays the key events of the last typed character
JQUERY_SET_VALUE = """
arguments[0].value = arguments[1];
var element = jQuery(arguments[0]);
var e = jQuery.Event('keydown');  e.which = arguments[2]; element.trigger(e);
var e = jQuery.Event('keypress'); e.which = arguments[2]; element.trigger(e);
var e = jQuery.Event('keyup');    e.which = arguments[2]; element.trigger(e);
"""

IS_IMAGE_LOADED = (
    "return arguments[0].complete && "
    "typeof arguments[0].naturalWidth != 'undefined' && "
    "arguments[0].naturalWidth > 0"
)

SCROLL_TO = "window.scrollTo(arguments[0], arguments[1]);"

CLONE_FILE_INPUT = """
var fileInput = document.createElement('input');
fileInput.setAttribute('type', arguments[1].getAttribute('type'));
fileInput.setAttribute('name', arguments[1].getAttribute('name'));
fileInput.style.width = '1px';
fileInput.style.height = '1px';
arguments[0].appendChild(fileInput);
return fileInput;
"""
