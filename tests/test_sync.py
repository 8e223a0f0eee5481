import os
import tempfile
import time
from datetime import datetime
from unittest import TestCase

from gamesync.config import SyncConfig
from gamesync.exceptions import NoSavesFoundError
from gamesync.saves import SaveFile, list_saves
from gamesync.sync import (
    SyncAction,
    classify,
    get_backup_name,
    sync_saves,
    touch_latest_cloud_save,
    write_backup,
)


def make_file(directory, name, modified, content=b"save"):
    path = os.path.join(directory, name)
    with open(path, "wb") as save_file:
        save_file.write(content)
    os.utime(path, (modified, modified))
    return path


def read_file(path):
    with open(path, "rb") as save_file:
        return save_file.read()


class SyncTestCase(TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.local_folder = os.path.join(self.tmpdir.name, "local")
        self.cloud_folder = os.path.join(self.tmpdir.name, "cloud")
        os.mkdir(self.local_folder)
        os.mkdir(self.cloud_folder)
        self.config = SyncConfig(
            base_save_name="Save",
            cloud_folder=self.cloud_folder,
            local_folder=self.local_folder,
            health_check_interval=1,
            process_name="Game",
            launch_uri="steam://rungameid/12345",
        )

    def tearDown(self):
        self.tmpdir.cleanup()


class TestClassify(TestCase):
    local = SaveFile(path="/local/Save1.sav", name="Save1.sav", modified=1000)
    cloud = SaveFile(path="/cloud/Save1.sav", name="Save1.sav", modified=2000)

    def test_no_saves_anywhere(self):
        with self.assertRaises(NoSavesFoundError):
            classify(None, None)

    def test_cloud_newer(self):
        self.assertEqual(classify(self.local, self.cloud), SyncAction.DOWNLOAD)

    def test_local_newer(self):
        self.assertEqual(classify(self.cloud, self.local), SyncAction.NONE)

    def test_equal_timestamps(self):
        self.assertEqual(classify(self.local, self.local), SyncAction.NONE)

    def test_only_local(self):
        self.assertEqual(classify(self.local, None), SyncAction.NONE)

    def test_only_cloud(self):
        self.assertEqual(classify(None, self.cloud), SyncAction.DOWNLOAD)


class TestSyncSaves(SyncTestCase):
    def test_both_folders_empty(self):
        with self.assertRaises(NoSavesFoundError):
            sync_saves(self.config)
        self.assertEqual(os.listdir(self.local_folder), [])
        self.assertEqual(os.listdir(self.cloud_folder), [])

    def test_newer_cloud_save_wins(self):
        make_file(self.local_folder, "Save1.sav", 1000, b"old")
        make_file(self.cloud_folder, "Save1.sav", 2000, b"new")
        result = sync_saves(self.config)
        self.assertEqual(result.action, SyncAction.DOWNLOAD)
        self.assertEqual(result.destination, os.path.join(self.local_folder, "Save1.sav"))
        latest = list_saves(self.local_folder, "Save")[0]
        self.assertGreaterEqual(latest.modified, 2000)
        self.assertEqual(read_file(latest.path), b"new")

    def test_newer_local_save_is_kept(self):
        local_path = make_file(self.local_folder, "Save1.sav", 3000, b"mine")
        make_file(self.cloud_folder, "Save1.sav", 2000, b"theirs")
        result = sync_saves(self.config)
        self.assertEqual(result.action, SyncAction.NONE)
        self.assertIsNone(result.destination)
        self.assertEqual(read_file(local_path), b"mine")

    def test_first_run_pulls_cloud_save(self):
        make_file(self.cloud_folder, "Save7.sav", 2000, b"cloud")
        result = sync_saves(self.config)
        self.assertEqual(result.action, SyncAction.DOWNLOAD)
        self.assertIsNone(result.local_save)
        self.assertEqual(read_file(os.path.join(self.local_folder, "Save7.sav")), b"cloud")

    def test_only_local_save(self):
        make_file(self.local_folder, "Save1.sav", 1000)
        result = sync_saves(self.config)
        self.assertEqual(result.action, SyncAction.NONE)
        self.assertEqual(os.listdir(self.cloud_folder), [])

    def test_cloud_backups_are_never_pulled(self):
        local_path = make_file(self.local_folder, "Save1.sav", 1000, b"mine")
        make_file(self.cloud_folder, "Save_Backup_20240101_120000.sav", 5000, b"backup")
        result = sync_saves(self.config)
        self.assertEqual(result.action, SyncAction.NONE)
        self.assertIsNone(result.cloud_save)
        self.assertEqual(os.listdir(self.local_folder), ["Save1.sav"])
        self.assertEqual(read_file(local_path), b"mine")

    def test_equal_timestamps_copy_nothing_twice(self):
        make_file(self.local_folder, "Save1.sav", 2000, b"same")
        make_file(self.cloud_folder, "Save1.sav", 2000, b"same")
        for second in range(2):
            self.assertEqual(sync_saves(self.config).action, SyncAction.NONE)
            write_backup(self.config, now=datetime(2024, 1, 1, 12, 0, second))
        self.assertEqual(os.listdir(self.local_folder), ["Save1.sav"])
        backups = [name for name in os.listdir(self.cloud_folder) if "_Backup_" in name]
        self.assertEqual(len(backups), 2)


class TestWriteBackup(SyncTestCase):
    def test_backup_name(self):
        self.assertEqual(
            get_backup_name("Save", datetime(2024, 1, 1, 12, 30, 5)),
            "Save_Backup_20240101_123005.sav",
        )

    def test_backup_matches_post_sync_local_save(self):
        make_file(self.local_folder, "Save1.sav", 1000, b"old")
        make_file(self.cloud_folder, "Save1.sav", 2000, b"new")
        sync_saves(self.config)
        backup_path = write_backup(self.config, now=datetime(2024, 1, 1, 12, 0, 0))
        self.assertEqual(backup_path, os.path.join(self.cloud_folder, "Save_Backup_20240101_120000.sav"))
        self.assertEqual(read_file(backup_path), b"new")

    def test_backup_runs_on_no_op_sync(self):
        make_file(self.local_folder, "Save1.sav", 3000, b"mine")
        sync_saves(self.config)
        before = set(os.listdir(self.cloud_folder))
        write_backup(self.config, now=datetime(2024, 1, 1, 12, 0, 0))
        added = set(os.listdir(self.cloud_folder)) - before
        self.assertEqual(added, {"Save_Backup_20240101_120000.sav"})

    def test_backup_keeps_save_timestamp(self):
        make_file(self.local_folder, "Save1.sav", 3000)
        backup_path = write_backup(self.config)
        self.assertEqual(os.stat(backup_path).st_mtime, 3000)

    def test_no_local_save(self):
        self.assertIsNone(write_backup(self.config))
        self.assertEqual(os.listdir(self.cloud_folder), [])

    def test_missing_cloud_folder_is_created(self):
        os.rmdir(self.cloud_folder)
        make_file(self.local_folder, "Save1.sav", 3000)
        self.assertTrue(os.path.isfile(write_backup(self.config)))


class TestTouchLatestCloudSave(SyncTestCase):
    def test_latest_cloud_save_is_touched(self):
        old_path = make_file(self.cloud_folder, "Save1.sav", 1000, b"old")
        new_path = make_file(self.cloud_folder, "Save2.sav", 2000, b"content")
        before = time.time()
        touched = touch_latest_cloud_save(self.config)
        self.assertEqual(touched.path, new_path)
        self.assertGreaterEqual(os.stat(new_path).st_mtime, before - 1)
        self.assertEqual(os.stat(old_path).st_mtime, 1000)
        self.assertEqual(read_file(new_path), b"content")

    def test_no_cloud_save(self):
        self.assertIsNone(touch_latest_cloud_save(self.config))

    def test_backups_are_not_touched(self):
        save_path = make_file(self.cloud_folder, "Save1.sav", 1000)
        backup_path = make_file(self.cloud_folder, "Save_Backup_20240101_120000.sav", 2000)
        touched = touch_latest_cloud_save(self.config)
        self.assertEqual(touched.path, save_path)
        self.assertEqual(os.stat(backup_path).st_mtime, 2000)

    def test_only_backups_in_cloud(self):
        backup_path = make_file(self.cloud_folder, "Save_Backup_20240101_120000.sav", 2000)
        self.assertIsNone(touch_latest_cloud_save(self.config))
        self.assertEqual(os.stat(backup_path).st_mtime, 2000)

    def test_cloud_save_older_than_local_is_left_alone(self):
        cloud_path = make_file(self.cloud_folder, "Save1.sav", 1000)
        make_file(self.local_folder, "Save1.sav", 3000)
        self.assertIsNone(touch_latest_cloud_save(self.config))
        self.assertEqual(os.stat(cloud_path).st_mtime, 1000)


class TestScenario(SyncTestCase):
    def test_cloud_save_from_noon_replaces_morning_save(self):
        morning = datetime(2024, 1, 1, 10, 0).timestamp()
        noon = datetime(2024, 1, 1, 12, 0).timestamp()
        local_path = make_file(self.local_folder, "Save1.sav", morning, b"morning")
        make_file(self.cloud_folder, "Save1.sav", noon, b"noon")

        sync_saves(self.config)
        backup_path = write_backup(self.config, now=datetime(2024, 1, 1, 12, 5, 9))

        self.assertEqual(read_file(local_path), b"noon")
        self.assertEqual(os.stat(local_path).st_mtime, noon)
        self.assertEqual(os.path.basename(backup_path), "Save_Backup_20240101_120509.sav")
        self.assertEqual(read_file(backup_path), b"noon")
