from nicegui import ui
import threading
import queue
from pathlib import Path

from core.canonical_models import WILDCARD, ConfigType, Scope
from core.config import CONFIG_FILE_NAME, load_config, merge_cli_overrides
from core.context import RunContext
from core.orchestrator import SyncOrchestrator
from adapters import create_default_registry

FEATURE_OPTIONS = [ct.value for ct in ConfigType]
SCOPE_OPTIONS = {'Project': Scope.PROJECT, 'Global (home directory)': Scope.GLOBAL}


class SyncApp:
    def __init__(self):
        self.log_queue = queue.Queue()
        self.registry = create_default_registry()

        # UI Elements (to be initialized in setup_ui)
        self.base_dir = None
        self.targets = None
        self.features = None
        self.scope = None
        self.import_target = None
        self.check_delete = None
        self.check_verbose = None
        self.log_area = None

    def setup_ui(self):
        with ui.header().classes('bg-primary text-white'):
            ui.label('Coding Agent Rules Sync').classes('text-h6')

        with ui.column().classes('w-full p-4 gap-4'):
            # Project Selection
            with ui.card().classes('w-full'):
                ui.label('Project').classes('text-lg font-bold')
                with ui.row().classes('w-full items-center'):
                    self.base_dir = ui.input('Base Directory (holds .agentsync/)', value='.').classes('flex-grow')
                    ui.button(icon='folder', on_click=lambda: self.pick_dir(self.base_dir))

            # Configuration
            with ui.card().classes('w-full'):
                ui.label('Configuration').classes('text-lg font-bold')
                tools = self.registry.list_tools()
                with ui.row().classes('w-full gap-4'):
                    self.targets = ui.select(tools, label='Targets (empty = all)', multiple=True, value=[]).classes('w-1/3')
                    self.features = ui.select(FEATURE_OPTIONS, label='Features (empty = all)', multiple=True, value=[]).classes('w-1/3')
                    self.scope = ui.select(list(SCOPE_OPTIONS), label='Scope', value='Project').classes('w-1/4')

                with ui.row().classes('w-full gap-4'):
                    self.check_delete = ui.checkbox('Delete orphaned tool files', value=True)
                    self.check_verbose = ui.checkbox('Verbose Logging', value=True)

            # Actions
            with ui.row().classes('w-full gap-4 items-center'):
                ui.button('Dry Run', icon='preview', on_click=lambda: self.run_generate(dry_run=True)).classes('bg-secondary text-white')
                ui.button('Generate', icon='sync', on_click=lambda: self.run_generate(dry_run=False)).classes('bg-primary text-white')
                self.import_target = ui.select(tools, label='Import from', value='claudecode').classes('w-1/6')
                ui.button('Import', icon='download', on_click=self.run_import).classes('bg-primary text-white')

            # Logs
            with ui.card().classes('w-full'):
                ui.label('Logs').classes('text-lg font-bold')
                self.log_area = ui.log().classes('w-full h-64 font-mono bg-gray-100 p-2 rounded')

        # Start timer
        ui.timer(0.1, self.process_logs)

    async def pick_dir(self, input_element):
        path = input_element.value or '.'
        result = await LocalFilePicker(directory=path, show_hidden_files=True)
        if result:
            input_element.set_value(result[0])

    def logger_callback(self, msg=""):
        self.log_queue.put(str(msg))

    def process_logs(self):
        while not self.log_queue.empty():
            msg = self.log_queue.get()
            self.log_area.push(msg)

    def run_generate(self, dry_run=False):
        self._start(self._generate_logic, dry_run)

    def run_import(self):
        if not self.import_target.value:
            ui.notify('Please choose a tool to import from.', type='negative')
            return
        self._start(self._import_logic, False)

    def _start(self, target, dry_run):
        if not self.base_dir.value:
            ui.notify('Please specify a base directory.', type='negative')
            return
        self.log_area.clear()
        threading.Thread(target=target, args=(dry_run,), daemon=True).start()

    def build_orchestrator(self, dry_run):
        base_dir = Path(self.base_dir.value).expanduser().resolve()
        config = merge_cli_overrides(
            load_config(base_dir / CONFIG_FILE_NAME),
            targets=list(self.targets.value) or [WILDCARD],
            features=list(self.features.value) or [WILDCARD],
            feature_overrides={} if self.features.value else None,
            base_dirs=[base_dir],
            scope=SCOPE_OPTIONS[self.scope.value],
            dry_run=dry_run,
            delete=self.check_delete.value,
            verbose=self.check_verbose.value,
        )
        context = RunContext(verbose=config.verbose, dry_run=config.dry_run,
                             logger=self.logger_callback)
        return SyncOrchestrator(config, self.registry, context)

    def _generate_logic(self, dry_run):
        try:
            report = self.build_orchestrator(dry_run).generate()
            self._log_report(report, "Dry run completed." if dry_run else "Generate completed.")
        except Exception as e:
            self.logger_callback(f"Error: {e}")

    def _import_logic(self, dry_run):
        try:
            report = self.build_orchestrator(dry_run).import_tool(self.import_target.value)
            self._log_report(report, f"Import from {self.import_target.value} completed.")
        except Exception as e:
            self.logger_callback(f"Error: {e}")

    def _log_report(self, report, done_message):
        for error in report.errors:
            self.logger_callback(f"Error: {error}")
        self.logger_callback(f"{report.total_written} file(s) written, "
                             f"{report.total_deleted} deleted, {len(report.errors)} error(s)")
        self.logger_callback(done_message)


class LocalFilePicker(ui.dialog):
    def __init__(self, directory: str, show_hidden_files: bool = False):
        super().__init__()
        self.path = Path(directory).expanduser()
        if not self.path.exists():
            self.path = Path('.')
        self.show_hidden_files = show_hidden_files
        with self, ui.card():
            self.grid = ui.aggrid({
                'columnDefs': [{'field': 'name', 'headerName': 'Directory', 'sortable': True}],
                'rowSelection': 'single',
            }, html_columns=[0]).classes('w-96').on('cellDoubleClicked', self.handle_double_click)
            with ui.row().classes('w-full justify-end'):
                ui.button('Cancel', on_click=self.close).props('outline')
                ui.button('Ok', on_click=self._handle_ok)
        self.update_grid()

    def update_grid(self):
        paths = [p for p in self.path.glob('*') if p.is_dir()]
        if not self.show_hidden_files:
            paths = [p for p in paths if not p.name.startswith('.')]
        paths.sort(key=lambda p: p.name.lower())
        rows = []
        if self.path.parent != self.path:
            rows.append({'name': '.. (up)', 'path': str(self.path.parent)})
        for p in paths:
            rows.append({'name': p.name, 'path': str(p)})
        self.grid.options['rowData'] = rows
        self.grid.update()

    def handle_double_click(self, e):
        self.path = Path(e.args['data']['path'])
        self.update_grid()

    def _handle_ok(self):
        self.submit([str(self.path)])


# Use a decorator to explicitly define the root page
@ui.page('/')
def main_page():
    app_instance = SyncApp()
    app_instance.setup_ui()


def start():
    # reload=False keeps nicegui from re-running the CLI entry point
    ui.run(title='Coding Agent Rules Sync', reload=False, port=8080, show=False)


if __name__ in {"__main__", "__mp_main__"}:
    start()
