"""
End-to-End Demo: Vigil on TodoMVC

Adds two todos on the Playwright TodoMVC demo site, completes one and
checks the counter, printing the recorded steps at the end.
"""

from vigil import UIAssertionError, VigilConfig, VigilSession
from vigil.layers.sense.conditions import css_class, exact_text, text, visible
import time


def main():
    print("=" * 60)
    print("VIGIL - End-to-End Demo")
    print("=" * 60)
    print()
    print("Target: https://demo.playwright.dev/todomvc/")
    print("-" * 60)

    config = VigilConfig.from_env(headless=False)
    start_time = time.time()

    with VigilSession(config=config) as vigil:
        vigil.open("https://demo.playwright.dev/todomvc/")

        try:
            new_todo = vigil.find(".new-todo")
            new_todo.set_value("Buy milk").press_enter()
            new_todo.set_value("Walk the dog").press_enter()

            todos = vigil.find_all(".todo-list li")
            todos[0].should_be(visible).should_have(exact_text("Buy milk"))
            todos[0].find(".toggle").click()
            todos[0].should_have(css_class("completed"))

            vigil.find(".todo-count").should_have(text("1 item left"))
            print(f"Todos: {todos.texts()}")
            print("SUCCESS! All checks passed")
        except UIAssertionError as e:
            print(f"FAILED:\n{e}")

        elapsed = time.time() - start_time

        print("-" * 60)
        print(f"Time elapsed: {elapsed:.2f}s")
        print()
        print("Steps:")
        for entry in vigil.recorder.entries:
            indent = "   " * (entry.depth + 1)
            print(f"{indent}[{entry.status.value}] {entry.subject}: {entry.description}")


if __name__ == "__main__":
    main()
