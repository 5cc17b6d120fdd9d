from slimaws.aws.client import InputType, ServiceClient
from slimaws.aws.result import Result


class SchedulerClient(ServiceClient):
    """
    Client of Amazon EventBridge Scheduler.

    The ``ClientToken`` of the creating, updating and deleting operations is generated if it is not given.
    ``StartDate`` and ``EndDate`` accept ``datetime`` objects (or ISO 8601 strings) and are sent as ISO 8601.
    """

    service_name = "scheduler"
    service_version = "2021-06-30"

    def create_schedule(self, input: InputType = None, **params) -> Result:
        """
        Creates the specified schedule.

        Required: ``Name``, ``ScheduleExpression``, ``FlexibleTimeWindow``, ``Target``.
        """
        return self._call("CreateSchedule", input, **params)

    def create_schedule_group(self, input: InputType = None, **params) -> Result:
        """Creates the specified schedule group. Required: ``Name``."""
        return self._call("CreateScheduleGroup", input, **params)

    def delete_schedule(self, input: InputType = None, **params) -> Result:
        """Deletes the specified schedule. Required: ``Name``."""
        return self._call("DeleteSchedule", input, **params)

    def delete_schedule_group(self, input: InputType = None, **params) -> Result:
        """
        Deletes the specified schedule group, including all schedules of the group. Deleting a group is eventually
        consistent. Required: ``Name``.
        """
        return self._call("DeleteScheduleGroup", input, **params)

    def get_schedule(self, input: InputType = None, **params) -> Result:
        """Retrieves the specified schedule. Required: ``Name``."""
        return self._call("GetSchedule", input, **params)

    def get_schedule_group(self, input: InputType = None, **params) -> Result:
        """Retrieves the specified schedule group. Required: ``Name``."""
        return self._call("GetScheduleGroup", input, **params)

    def list_schedule_groups(self, input: InputType = None, **params) -> Result:
        """Returns a page of schedule groups, the ``NextToken`` of the result selects the next page."""
        return self._call("ListScheduleGroups", input, **params)

    def list_schedules(self, input: InputType = None, **params) -> Result:
        """Returns a page of schedules, the ``NextToken`` of the result selects the next page."""
        return self._call("ListSchedules", input, **params)

    def list_tags_for_resource(self, input: InputType = None, **params) -> Result:
        """Lists the tags of a schedule group. Required: ``ResourceArn``."""
        return self._call("ListTagsForResource", input, **params)

    def tag_resource(self, input: InputType = None, **params) -> Result:
        """Assigns tags to a schedule group. Required: ``ResourceArn``, ``Tags``."""
        return self._call("TagResource", input, **params)

    def untag_resource(self, input: InputType = None, **params) -> Result:
        """Removes tags from a schedule group. Required: ``ResourceArn``, ``TagKeys``."""
        return self._call("UntagResource", input, **params)

    def update_schedule(self, input: InputType = None, **params) -> Result:
        """
        Updates the specified schedule. All properties of the schedule are replaced, unset properties are reset to
        their defaults.

        Required: ``Name``, ``ScheduleExpression``, ``FlexibleTimeWindow``, ``Target``.
        """
        return self._call("UpdateSchedule", input, **params)
