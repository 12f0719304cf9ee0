"""Tests for CLI commands."""

import pytest
import tempfile
import yaml
from pathlib import Path
from unittest.mock import patch, MagicMock
from argparse import Namespace

from native_migrator.cli import (
    cmd_init,
    load_and_validate_config,
    main,
    prompt_package_manager,
    prompt_yes_no,
)
from native_migrator.constants import BACKUP_PREFIX, CONFIG_FILE_NAME
from native_migrator.core.migrator import MigrationError
from native_migrator.utils.config import Config, ConfigValidationError, create_default_config


def write_config(directory: Path, root: Path) -> Path:
    config_path = directory / CONFIG_FILE_NAME
    create_default_config(str(root)).save(config_path)
    return config_path


class TestCmdInit:
    """Test cases for cmd_init command."""

    def test_init_creates_config_file(self):
        """init should write a default config file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with patch('native_migrator.cli.Path.cwd', return_value=Path(tmpdir)):
                result = cmd_init(Namespace(root='app', force=False))

                assert result == 0
                config_path = Path(tmpdir) / CONFIG_FILE_NAME
                assert config_path.exists()

                with open(config_path, 'r') as f:
                    config_data = yaml.safe_load(f)
                assert config_data['project']['root'] == 'app'
                assert config_data['versions']['ios_deployment_target'] == '14.0'

    def test_init_fails_without_force_if_exists(self):
        """Existing config should not be overwritten without --force."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / CONFIG_FILE_NAME
            config_path.write_text('existing: config')

            with patch('native_migrator.cli.Path.cwd', return_value=Path(tmpdir)):
                assert cmd_init(Namespace(root='.', force=False)) == 1

            assert config_path.read_text() == 'existing: config'

    def test_init_overwrites_with_force(self):
        """--force should overwrite the config."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / CONFIG_FILE_NAME
            config_path.write_text('existing: config')

            with patch('native_migrator.cli.Path.cwd', return_value=Path(tmpdir)):
                assert cmd_init(Namespace(root='.', force=True)) == 0

            assert 'project' in yaml.safe_load(config_path.read_text())


class TestLoadAndValidateConfig:
    """Test cases for load_and_validate_config."""

    def test_valid_config(self, tmp_path):
        config = load_and_validate_config(write_config(tmp_path, tmp_path))
        assert isinstance(config, Config)
        assert config.root == tmp_path

    def test_invalid_config(self, tmp_path, capsys):
        config_path = tmp_path / CONFIG_FILE_NAME
        config_path.write_text(yaml.dump({'dependencies': {'package_manager': 'maven'}}))

        with pytest.raises(ConfigValidationError):
            load_and_validate_config(config_path)

        assert 'Invalid package manager' in capsys.readouterr().out

    def test_skip_validation(self, tmp_path):
        config_path = tmp_path / CONFIG_FILE_NAME
        config_path.write_text(yaml.dump({'dependencies': {'package_manager': 'maven'}}))

        config = load_and_validate_config(config_path, validate=False)
        assert config.dependencies.package_manager == 'maven'


class TestPrompts:
    """Test cases for interactive prompts."""

    @pytest.mark.parametrize("answer,expected", [('y', True), ('YES', True), ('n', False), ('', True)])
    def test_prompt_yes_no(self, answer, expected):
        with patch('builtins.input', return_value=answer):
            assert prompt_yes_no("Continue?") is expected

    def test_prompt_yes_no_eof(self):
        with patch('builtins.input', side_effect=EOFError):
            assert prompt_yes_no("Continue?") is False

    def test_prompt_package_manager(self):
        with patch('builtins.input', return_value='pnpm'):
            assert prompt_package_manager() == 'pnpm'

    def test_prompt_package_manager_unknown_answer(self):
        with patch('builtins.input', return_value='maven'):
            assert prompt_package_manager('yarn') == 'yarn'


class TestCmdMigrate:
    """Test cases for the migrate command."""

    @patch('native_migrator.cli.Migrator')
    @patch('native_migrator.cli.load_and_validate_config')
    def test_migrate_yes(self, mock_load_config, mock_migrator_class):
        mock_load_config.return_value = Config()
        mock_migrator = mock_migrator_class.return_value
        mock_migrator.run.return_value = MagicMock(complete=True, backup_dir=None)

        result = main(['migrate', '--yes', '--package-manager', 'yarn'])

        assert result == 0
        _, kwargs = mock_migrator_class.call_args
        assert kwargs['package_manager'] == 'yarn'
        assert kwargs['dry_run'] is False
        assert kwargs['use_threads'] is True
        mock_migrator.run.assert_called_once_with(confirm=None, run_install=True, choose_install=None)

    @patch('native_migrator.cli.Migrator')
    @patch('native_migrator.cli.load_and_validate_config')
    def test_migrate_prompts(self, mock_load_config, mock_migrator_class):
        mock_load_config.return_value = Config()
        mock_migrator = mock_migrator_class.return_value
        mock_migrator.run.return_value = MagicMock(complete=True, backup_dir=None)

        with patch('builtins.input') as mock_input:
            result = main(['migrate'])
            # Nothing is asked before the migrator confirms the migration
            mock_input.assert_not_called()

            _, run_kwargs = mock_migrator.run.call_args
            assert run_kwargs['confirm'] is not None
            mock_input.side_effect = ['y', 'bun']
            assert run_kwargs['choose_install']('npm') == 'bun'

        assert result == 0
        _, kwargs = mock_migrator_class.call_args
        assert kwargs['package_manager'] is None

    @patch('native_migrator.cli.Migrator')
    @patch('native_migrator.cli.load_and_validate_config')
    def test_migrate_prompts_keep_given_package_manager(self, mock_load_config, mock_migrator_class):
        mock_load_config.return_value = Config()
        mock_migrator = mock_migrator_class.return_value
        mock_migrator.run.return_value = MagicMock(complete=True, backup_dir=None)

        main(['migrate', '--package-manager', 'pnpm'])

        _, run_kwargs = mock_migrator.run.call_args
        with patch('builtins.input', return_value='y') as mock_input:
            assert run_kwargs['choose_install']('npm') == 'pnpm'
        assert mock_input.call_count == 1

    @patch('native_migrator.cli.Migrator')
    @patch('native_migrator.cli.load_and_validate_config')
    def test_migrate_declines_install(self, mock_load_config, mock_migrator_class):
        mock_load_config.return_value = Config()
        mock_migrator = mock_migrator_class.return_value
        mock_migrator.run.return_value = MagicMock(complete=True, backup_dir=None)

        main(['migrate'])

        _, run_kwargs = mock_migrator.run.call_args
        with patch('builtins.input', return_value='n'):
            assert run_kwargs['choose_install']('npm') is None

    @patch('native_migrator.cli.Migrator')
    @patch('native_migrator.cli.load_and_validate_config')
    def test_migrate_options(self, mock_load_config, mock_migrator_class):
        mock_load_config.return_value = Config()
        mock_migrator_class.return_value.run.return_value = MagicMock(complete=True, backup_dir=None)

        main(['migrate', '--yes', '--skip-install', '--dry-run', '--no-backup', '--no-threads'])

        _, kwargs = mock_migrator_class.call_args
        assert kwargs['dry_run'] is True
        assert kwargs['backup'] is False
        assert kwargs['use_threads'] is False
        _, run_kwargs = mock_migrator_class.return_value.run.call_args
        assert run_kwargs['run_install'] is False
        assert run_kwargs['choose_install'] is None

    @patch('native_migrator.cli.Migrator')
    @patch('native_migrator.cli.load_and_validate_config')
    def test_migrate_incomplete(self, mock_load_config, mock_migrator_class):
        mock_load_config.return_value = Config()
        mock_migrator_class.return_value.run.return_value = MagicMock(complete=False, backup_dir=None)

        assert main(['migrate', '--yes']) == 1

    @patch('native_migrator.cli.Migrator')
    @patch('native_migrator.cli.load_and_validate_config')
    def test_migrate_error(self, mock_load_config, mock_migrator_class, capsys):
        mock_load_config.return_value = Config()
        mock_migrator_class.return_value.run.side_effect = MigrationError("User canceled migration.")

        assert main(['migrate', '--yes']) == 1
        assert 'User canceled migration.' in capsys.readouterr().out

    @patch('native_migrator.cli.load_and_validate_config')
    def test_migrate_config_error(self, mock_load_config):
        mock_load_config.side_effect = ConfigValidationError(["bad"])
        assert main(['migrate', '--yes']) == 1


class TestPatchCommands:
    """Test cases for replace and strip commands."""

    def test_replace(self, tmp_path, capsys):
        podfile = tmp_path / 'Podfile'
        podfile.write_text("platform :ios, '13.0'\n")

        result = main(['replace', str(podfile), '--start', "platform :ios, '", '--end', "'", '--value', '14.0'])

        assert result == 0
        assert podfile.read_text() == "platform :ios, '14.0'\n"
        assert 'Patched' in capsys.readouterr().out

    def test_replace_dry_run(self, tmp_path):
        podfile = tmp_path / 'Podfile'
        podfile.write_text("platform :ios, '13.0'\n")

        main(['replace', str(podfile), '-s', "platform :ios, '", '-e', "'", '--value', '14.0', '--dry-run'])

        assert podfile.read_text() == "platform :ios, '13.0'\n"

    def test_replace_marker_missing(self, tmp_path):
        podfile = tmp_path / 'Podfile'
        podfile.write_text("use_frameworks!\n")

        assert main(['replace', str(podfile), '-s', "platform :ios, '", '-e', "'", '--value', '14.0']) == 1

    def test_strip(self, tmp_path):
        source = tmp_path / 'AppDelegate.swift'
        source.write_text("class A {\n}\nfunc legacy() {\n  old()\n}\n")

        assert main(['strip', str(source), '--marker', 'func legacy']) == 0
        assert source.read_text() == "class A {\n}\n"

    def test_strip_unclosed_block(self, tmp_path):
        source = tmp_path / 'AppDelegate.swift'
        source.write_text("func legacy() {\n  old()\n")

        assert main(['strip', str(source), '-m', 'func legacy']) == 1
        assert source.read_text() == "func legacy() {\n  old()\n"


class TestCmdBackups:
    """Test cases for the backups command."""

    def test_no_backups(self, tmp_path, capsys):
        config_path = write_config(tmp_path, tmp_path)
        assert main(['backups', '--config', str(config_path)]) == 0
        assert 'No backups found' in capsys.readouterr().out

    def test_list_backups(self, tmp_path, capsys):
        (tmp_path / f'{BACKUP_PREFIX}20250101_120000').mkdir()
        config_path = write_config(tmp_path, tmp_path)

        assert main(['backups', '--config', str(config_path), '--list']) == 0
        assert f'{BACKUP_PREFIX}20250101_120000' in capsys.readouterr().out

    def test_restore(self, tmp_path):
        backup = tmp_path / f'{BACKUP_PREFIX}1'
        backup.mkdir()
        (backup / 'package.json').write_text('{"restored": true}')
        (tmp_path / 'package.json').write_text('{}')
        config_path = write_config(tmp_path, tmp_path)

        assert main(['backups', '--config', str(config_path), '--restore', backup.name]) == 0
        assert (tmp_path / 'package.json').read_text() == '{"restored": true}'

    def test_restore_missing(self, tmp_path):
        config_path = write_config(tmp_path, tmp_path)
        assert main(['backups', '--config', str(config_path), '--restore', 'nope']) == 1

    def test_cleanup(self, tmp_path, capsys):
        for i in range(3):
            (tmp_path / f'{BACKUP_PREFIX}{i}').mkdir()
        config_path = write_config(tmp_path, tmp_path)

        assert main(['backups', '--config', str(config_path), '--cleanup', '1']) == 0
        assert 'Removed 2 backup(s)' in capsys.readouterr().out
        assert len(list(tmp_path.glob(f'{BACKUP_PREFIX}*'))) == 1


class TestMain:
    """Test cases for the entry point."""

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])
        assert exc_info.value.code == 0
        assert 'native-migrator' in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert 'usage' in capsys.readouterr().out.lower()
