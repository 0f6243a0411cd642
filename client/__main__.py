"""Submit an attendance from the command line: python -m client --help"""
import os
import sys

import click

from client.form_client import AttendanceFormClient, FormError


@click.command()
@click.option("--url", default="http://127.0.0.1:5000", show_default=True, help="Service base URL")
@click.option("--passkey", prompt=True, hide_input=True)
@click.option("--employee-id", required=True)
@click.option("--presence-type", default="CI", show_default=True)
@click.option("--work-type", default="wfo", show_default=True)
@click.option("--apk-version", default="2.0.0", show_default=True)
@click.option("--information", default="")
@click.option("--lat", "latitude", required=True)
@click.option("--lng", "longitude", required=True)
@click.option("--photo", type=click.File("rb"), default=None)
def main(url, passkey, employee_id, presence_type, work_type, apk_version, information,
         latitude, longitude, photo):
    client = AttendanceFormClient(url)
    try:
        client.validate_pass_key(passkey)
        client.load_config()
        client.update(
            employeeId=employee_id,
            presenceType=presence_type,
            workType=work_type,
            apkVersion=apk_version,
            information=information,
        )
        client.set_location(latitude, longitude)
        if photo is not None:
            client.attach_photo(os.path.basename(photo.name), photo.read())
        result = client.submit()
    except FormError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Attendance Submitted Successfully! id={result['data']['_id']}")


if __name__ == "__main__":
    main()
