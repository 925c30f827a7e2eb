"""NiceGUI page: upload form, analysis dashboard and grounded chat."""

import logging

from nicegui import events, ui

from insightstream.models.schemas import AnalysisResult, ChatMessage, StatisticEntry
from insightstream.parsing import SUPPORTED_EXTENSIONS
from insightstream.session import SessionController, SessionStatus

logger = logging.getLogger(__name__)

ACCEPTED_FILES = ",".join(f".{ext}" for ext in SUPPORTED_EXTENSIONS)

TREND_ICONS = {
    "up": ("trending_up", "text-emerald-500"),
    "down": ("trending_down", "text-rose-500"),
    "neutral": ("trending_flat", "text-slate-400"),
}

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;800&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f8fafc; }

    .card {
        background: white;
        border: 1px solid #e2e8f0;
        border-radius: 12px;
        box-shadow: 0 1px 2px rgba(0, 0, 0, 0.04);
    }

    .logo { background: #2563eb; box-shadow: 0 1px 4px #bfdbfe; }

    .message-user {
        background: #2563eb;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-model {
        background: #f1f5f9;
        color: #1e293b;
        border-radius: 18px 18px 18px 4px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #2563eb;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .message-model p { margin: 0; }
</style>
"""


def chart_options(analysis: AnalysisResult) -> dict:
    """Build ECharts options for the analysis chart data."""
    return {
        "tooltip": {"trigger": "axis"},
        "grid": {"left": 40, "right": 16, "top": 16, "bottom": 48, "containLabel": True},
        "xAxis": {
            "type": "category",
            "data": [point.name for point in analysis.chart_data],
            "axisLabel": {"rotate": 30 if len(analysis.chart_data) > 6 else 0},
        },
        "yAxis": {"type": "value"},
        "series": [
            {
                "type": "bar",
                "data": [point.value for point in analysis.chart_data],
                "itemStyle": {"color": "#2563eb", "borderRadius": [4, 4, 0, 0]},
            }
        ],
    }


def format_statistic(entry: StatisticEntry) -> str:
    if isinstance(entry.value, float):
        return f"{entry.value:,.2f}".rstrip("0").rstrip(".")
    if isinstance(entry.value, int):
        return f"{entry.value:,}"
    return entry.value


def render_statistics(statistics: list[StatisticEntry]) -> None:
    with ui.grid().classes("w-full grid-cols-2 md:grid-cols-4 gap-4"):
        for entry in statistics:
            with ui.column().classes("card p-4 gap-1"):
                ui.label(entry.label).classes("text-xs font-medium text-slate-500 uppercase")
                with ui.row().classes("items-center gap-2"):
                    ui.label(format_statistic(entry)).classes("text-2xl font-bold text-slate-900")
                    if entry.trend:
                        icon, color = TREND_ICONS[entry.trend]
                        ui.icon(icon).classes(f"text-xl {color}")


def render_bullets(title: str, icon: str, items: list[str]) -> None:
    with ui.column().classes("card p-5 gap-3 w-full"):
        with ui.row().classes("items-center gap-2"):
            ui.icon(icon).classes("text-blue-600")
            ui.label(title).classes("text-lg font-semibold text-slate-900")
        if not items:
            ui.label("Nothing to show.").classes("text-sm text-slate-400")
        for item in items:
            with ui.row().classes("gap-2 items-start no-wrap"):
                ui.icon("chevron_right").classes("text-slate-400 mt-0.5")
                ui.label(item).classes("text-sm text-slate-700")


def render_dashboard(analysis: AnalysisResult, file_name: str) -> None:
    """Summary, statistic cards, chart, insights and suggestions."""
    with ui.column().classes("card p-5 gap-2 w-full"):
        with ui.row().classes("items-center gap-2"):
            ui.icon("description").classes("text-slate-400")
            ui.label(file_name).classes("text-sm text-slate-500")
        ui.label("Summary").classes("text-lg font-semibold text-slate-900")
        ui.label(analysis.summary).classes("text-slate-700 leading-relaxed")

    if analysis.statistics:
        render_statistics(analysis.statistics)

    if analysis.chart_data:
        with ui.column().classes("card p-5 gap-2 w-full"):
            ui.label("Key figures").classes("text-lg font-semibold text-slate-900")
            ui.echart(chart_options(analysis)).classes("w-full h-72")

    with ui.grid().classes("w-full grid-cols-1 md:grid-cols-2 gap-4"):
        render_bullets("Key insights", "lightbulb", analysis.key_insights)
        render_bullets("Suggestions", "tips_and_updates", analysis.suggestions)


def render_message(message: ChatMessage) -> None:
    is_user = message.role == "user"
    align = "justify-end" if is_user else "justify-start"
    bubble = "message-user" if is_user else "message-model"

    with ui.row().classes(f"w-full {align}"):
        with ui.column().classes("max-w-[85%] gap-1"):
            with ui.element("div").classes(f"px-4 py-2 {bubble}"):
                if is_user:
                    ui.label(message.text).classes("text-sm whitespace-pre-wrap")
                else:
                    ui.markdown(message.text).classes("text-sm")
            ui.label(message.timestamp.strftime("%I:%M %p")).classes(
                f"text-[10px] text-slate-400 {'self-end' if is_user else 'self-start'}"
            )


@ui.page("/")
def dashboard_page() -> None:
    """Main page. Each browser client gets its own session controller."""
    ui.add_head_html(CUSTOM_CSS)
    controller = SessionController()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        logger.info(f"Received upload {e.file.name} ({len(data)} bytes)")
        await controller.select_file(e.file.name, data)

    async def handle_send(input_field: ui.input) -> None:
        text = input_field.value or ""
        if not text.strip():
            return
        input_field.value = ""
        await controller.send_message(text)

    @ui.refreshable
    def header_actions() -> None:
        if controller.session.file is not None:
            ui.button("Reset / New Upload", icon="restart_alt", on_click=controller.reset).props(
                "flat no-caps color=grey-8"
            )

    @ui.refreshable
    def chat_panel() -> None:
        session = controller.session
        with ui.column().classes("card w-full gap-0"):
            with ui.row().classes("w-full px-4 py-3 border-b items-center gap-2"):
                ui.icon("forum").classes("text-blue-600")
                ui.label("Ask about your data").classes("font-semibold text-slate-900")

            with ui.scroll_area().classes("w-full h-[28rem] bg-slate-50"):
                with ui.column().classes("w-full p-4 gap-3"):
                    if not session.chat_history:
                        ui.label(
                            f"Ask anything about {session.file.name if session.file else 'your file'}."
                        ).classes("text-sm text-slate-400")
                    for message in session.chat_history:
                        render_message(message)
                    if session.chat_loading:
                        with ui.row().classes("message-model px-4 py-3 gap-1"):
                            for _ in range(3):
                                ui.element("div").classes("typing-dot")

            with ui.row().classes("w-full p-3 gap-2 items-center no-wrap"):
                input_field = (
                    ui.input(placeholder="Type a question...")
                    .props("outlined dense")
                    .classes("flex-grow")
                )
                send_btn = ui.button(icon="send", on_click=lambda: handle_send(input_field)).props(
                    "round unelevated color=primary"
                )
                input_field.on("keydown.enter", lambda: handle_send(input_field))
                if session.chat_loading:
                    input_field.disable()
                    send_btn.disable()

        ui.label("AI can make mistakes. Check important info.").classes(
            "text-xs text-slate-400 mt-2"
        )

    @ui.refreshable
    def main_view() -> None:
        session = controller.session
        status = controller.status

        if status is SessionStatus.PROCESSING:
            with ui.column().classes("w-full items-center py-20 gap-6"):
                ui.spinner(size="6em", thickness=4).props("color=primary")
                ui.label("Analyzing Your Data").classes("text-xl font-semibold text-slate-800")
                ui.label("Processing insights and generating your dashboard...").classes(
                    "text-slate-500"
                )
            return

        if status is SessionStatus.READY and session.analysis and session.file:
            with ui.grid().classes("w-full grid-cols-1 xl:grid-cols-12 gap-8 items-start"):
                with ui.column().classes("xl:col-span-8 gap-6"):
                    render_dashboard(session.analysis, session.file.name)
                with ui.column().classes("xl:col-span-4 gap-0"):
                    chat_panel()
            return

        with ui.column().classes("w-full items-center py-12 gap-8"):
            with ui.column().classes("items-center max-w-2xl gap-4 text-center"):
                ui.label("Turn raw files into actionable insights.").classes(
                    "text-4xl font-extrabold text-slate-900 text-center"
                )
                ui.label(
                    "Upload your CSV, Excel, or PDF and get instant analytics, "
                    "suggestions, and answers to your questions."
                ).classes("text-lg text-slate-600 text-center")
            ui.upload(
                label="Drop a CSV, Excel or PDF file",
                on_upload=handle_upload,
                auto_upload=True,
                max_files=1,
            ).props(f"accept={ACCEPTED_FILES} color=primary").classes("w-full max-w-lg")
            if session.last_error:
                with ui.row().classes(
                    "p-4 bg-rose-50 border border-rose-100 rounded-xl items-center gap-3"
                ):
                    ui.icon("error_outline").classes("text-rose-500")
                    ui.label(session.last_error).classes("text-sm text-rose-700")

    # Chat-only updates redraw just the chat panel, not the whole dashboard
    rendered = {"view": (controller.status, id(controller.session))}

    def on_change(_: SessionController) -> None:
        view = (controller.status, id(controller.session))
        header_actions.refresh()
        if view != rendered["view"]:
            rendered["view"] = view
            main_view.refresh()
        else:
            chat_panel.refresh()

    unsubscribe = controller.subscribe(on_change)
    ui.context.client.on_disconnect(unsubscribe)

    # === UI Layout ===
    with ui.column().classes("w-full min-h-screen gap-0"):
        with ui.row().classes("w-full bg-white border-b px-6 h-16 items-center justify-between"):
            with ui.row().classes("items-center gap-2"):
                with ui.element("div").classes("logo w-8 h-8 rounded-lg flex items-center justify-center"):
                    ui.label("IS").classes("text-white font-bold")
                ui.label("InsightStream AI").classes("text-xl font-bold text-slate-900")
            header_actions()

        with ui.column().classes("w-full max-w-7xl mx-auto p-4 md:p-8 flex-grow"):
            main_view()

        with ui.row().classes("w-full bg-white border-t py-6 justify-center"):
            ui.label("Powered by Agno and OpenAI-compatible models").classes(
                "text-slate-400 text-sm font-medium"
            )
