"""手动推进的调度器

测试中代替 QtScheduler：时间只在 advance() 时前进，到期任务按时间顺序触发。
"""
from sonicviz.core.interfaces.scheduler import IRepeatingTask, IScheduler


class ManualTask(IRepeatingTask):
    def __init__(self, scheduler, interval_ms, callback):
        self._scheduler = scheduler
        self._interval_ms = float(interval_ms)
        self._callback = callback
        self.next_due = None
        self.fire_count = 0
        self.start_count = 0
        self.cancel_count = 0

    @property
    def interval_ms(self):
        return self._interval_ms

    @property
    def is_active(self):
        return self.next_due is not None

    def start(self):
        self.start_count += 1
        self.next_due = self._scheduler.now_ms() + self._interval_ms

    def cancel(self):
        self.cancel_count += 1
        self.next_due = None

    def fire(self):
        self.fire_count += 1
        self._callback()


class ManualScheduler(IScheduler):
    def __init__(self):
        self._now = 0.0
        self.tasks = []

    def create_repeating_task(self, interval_ms, callback):
        task = ManualTask(self, interval_ms, callback)
        self.tasks.append(task)
        return task

    def now_ms(self):
        return self._now

    def advance(self, ms):
        """推进时钟并触发所有到期任务"""
        target = self._now + ms
        while True:
            due = [t for t in self.tasks if t.is_active and t.next_due <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.next_due)
            self._now = task.next_due
            task.next_due += task.interval_ms
            task.fire()
        self._now = target

    def active_tasks(self):
        return [t for t in self.tasks if t.is_active]
