"""NiceGUI chat page bound to the session controller."""

from nicegui import ui

from src.models.message import Message, Sender
from src.session.controller import get_session_controller
from src.session.store import ChatStatus

CUSTOM_CSS = """
<style>
    body { background: #f3f4f6; }
    .header { background: #fde047; border-bottom: 4px solid black; }
    .error-banner { background: #fee2e2; color: #b91c1c; }
</style>
"""


def render_message(msg: Message) -> None:
    is_user = msg.sender == Sender.USER
    with ui.chat_message(name="You" if is_user else "Gemini", sent=is_user).classes("w-full"):
        if is_user:
            ui.label(msg.text).classes("whitespace-pre-wrap")
        else:
            ui.markdown(msg.text)


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    controller = get_session_controller()

    scroll_area: ui.scroll_area
    input_field: ui.textarea
    send_btn: ui.button
    clear_btn: ui.button

    @ui.refreshable
    def message_list() -> None:
        if not controller.messages:
            with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                ui.icon("forum").classes("text-5xl text-gray-300")
                ui.label("Start a conversation").classes("text-lg text-gray-400")
            return
        for msg in controller.messages:
            render_message(msg)

    @ui.refreshable
    def status_area() -> None:
        if controller.busy:
            with ui.row().classes("items-center gap-2 px-2"):
                ui.spinner("dots", size="lg")
                ui.label("Gemini is typing...").classes("text-sm text-gray-500 italic")

    @ui.refreshable
    def error_banner() -> None:
        if controller.error:
            ui.label(controller.error).classes("error-banner w-full p-4 text-center")

    def on_status(status: ChatStatus) -> None:
        status_area.refresh()
        error_banner.refresh()
        input_field.set_enabled(not status.busy)
        send_btn.set_enabled(not status.busy)
        clear_btn.set_enabled(not status.busy)
        scroll_area.scroll_to(percent=1)

    def on_messages(_) -> None:
        message_list.refresh()
        scroll_area.scroll_to(percent=1)

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or controller.busy:
            return
        input_field.value = ""
        await controller.send_message(text)

    def clear_chat() -> None:
        controller.clear()

    # === UI Layout ===
    with ui.column().classes("w-full max-w-3xl mx-auto h-screen gap-0"):
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("smart_toy").classes("text-3xl")
                ui.label("Gemini AI Chat").classes("text-2xl font-bold")
            clear_btn = ui.button(icon="delete", on_click=clear_chat).props(
                "flat round color=black"
            )

        scroll_area = ui.scroll_area().classes("flex-grow w-full bg-gray-50")
        with scroll_area:
            with ui.column().classes("w-full p-5 gap-4"):
                message_list()
                status_area()

        error_banner()

        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            input_field = (
                ui.textarea(placeholder="Type a message...")
                .props("autogrow outlined dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.exact.prevent", send_message)
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")

    on_status(controller.status)
    unsubscribe_store = controller.store.subscribe(on_messages)
    unsubscribe_status = controller.status.subscribe(on_status)

    def detach() -> None:
        unsubscribe_store()
        unsubscribe_status()

    ui.context.client.on_disconnect(detach)


def main() -> None:
    ui.run(title="Gemini AI Chat", port=8080, reload=False)


if __name__ == "__main__":
    main()
